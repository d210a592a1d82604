# =============================================================================
# figprint Entry Point for `python -m figprint`
# =============================================================================
# This module allows figprint to be run as a Python module:
#
#   python -m figprint Hello
#
# This is equivalent to running the 'figprint' command after installation.
# =============================================================================

import sys

from figprint.app import main

if __name__ == "__main__":
    sys.exit(main())
