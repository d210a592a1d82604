# =============================================================================
# figprint Command Line
# =============================================================================
# Renders text as a FIGlet banner on stdout.
#
#   figprint Hello World
#   echo "Hello" | figprint --font standard --layout kerning
#   figprint --preview
#
# Settings come from (highest priority first):
#   - Command-line options
#   - config.toml in the XDG config directory
#   - Built-in defaults (bundled font, smushing)
# =============================================================================

import argparse
import logging
import sys
from pathlib import Path

from figprint import __app_name__, __version__
from figprint.config import Config, ConfigError, list_fonts, resolve_font_path
from figprint.core import FIGFont, FormatError, LayoutMode, get_default_font
from figprint.rendering import RenderEngine

logger = logging.getLogger(__name__)


LAYOUT_CHOICES = ("full", "kerning", "smushing")


class FontNotFoundError(Exception):
    """Raised when a font name doesn't resolve to a file."""
    pass


def load_font(name: str, directory: Path) -> FIGFont:
    """
    Load a font by name or path, or the bundled font if `name` is empty.

    Raises:
        FontNotFoundError: If the name doesn't resolve to a file.
        FormatError: If the file is not a valid FIGfont.
        OSError: If the file cannot be read.
    """
    if not name:
        return get_default_font()

    path = resolve_font_path(name, directory)
    if path is None:
        raise FontNotFoundError(f"Font '{name}' not found in {directory}")

    return FIGFont.from_file(path)


def build_engine(args: argparse.Namespace, config: Config) -> RenderEngine:
    """
    Create a RenderEngine from command-line options and configuration.

    Raises:
        ConfigError, FontNotFoundError, FormatError, OSError
    """
    directory = Path(args.font_dir) if args.font_dir else config.fonts_dir
    font = load_font(args.font if args.font is not None else config.font, directory)

    mode = LayoutMode.from_name(args.layout) if args.layout else config.layout_mode

    return RenderEngine(
        font=font,
        mode=mode,
        line_separator=config.line_separator,
        use_ansi_colors=args.ansi_colors or config.ansi_colors,
        paragraph_mode=config.paragraph_mode and not args.no_paragraph,
    )


# =============================================================================
# CLI Entry Point
# =============================================================================

def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        Parsed arguments namespace.
    """
    parser = argparse.ArgumentParser(
        prog=__app_name__,
        description="figprint: render text as FIGlet banners",
    )

    parser.add_argument(
        "text",
        nargs="*",
        help="Text to render (read from stdin when omitted)",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "-f", "--font",
        help="Font name or path to a .flf file (default: bundled font)",
    )

    parser.add_argument(
        "--font-dir",
        help="Directory searched for font names",
    )

    parser.add_argument(
        "-l", "--layout",
        choices=LAYOUT_CHOICES,
        help="Layout mode (default: smushing)",
    )

    parser.add_argument(
        "--ansi-colors",
        action="store_true",
        help="Keep ANSI color sequences from the input",
    )

    parser.add_argument(
        "--no-paragraph",
        action="store_true",
        help="Render all input lines as one line",
    )

    parser.add_argument(
        "--list-fonts",
        action="store_true",
        help="List the fonts in the font directory and exit",
    )

    parser.add_argument(
        "--preview",
        action="store_true",
        help="Open the interactive preview",
    )

    parser.add_argument(
        "--config",
        type=Path,
        help="Path to config file (default: XDG config location)",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode (verbose logging)",
    )

    return parser.parse_args(argv)


def read_text(args: argparse.Namespace) -> str | None:
    """Returns the text to render from arguments or piped stdin."""
    if args.text:
        return " ".join(args.text)

    if sys.stdin.isatty():
        return None

    return sys.stdin.read()


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for figprint.

    This function:
        1. Parses command-line arguments
        2. Handles special commands (--list-fonts, --preview)
        3. Loads configuration and the font
        4. Renders the text to stdout

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = Config.load(args.config)

        # Handle --list-fonts flag
        if args.list_fonts:
            directory = Path(args.font_dir) if args.font_dir else config.fonts_dir
            fonts = list_fonts(directory)
            if not fonts:
                print(f"No fonts found in {directory}")
                return 0
            print("Available fonts:")
            for name in fonts:
                print(f"  - {name}")
            return 0

        engine = build_engine(args, config)
    except (ConfigError, FontNotFoundError, FormatError, OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.preview:
        # Textual is only needed for the preview
        from figprint.ui import PreviewApp

        PreviewApp(engine).run()
        return 0

    text = read_text(args)
    if text is None:
        print("No text provided to render. Use --help for usage information.", file=sys.stderr)
        return 1
    if not text.strip():
        print("No input received from stdin.", file=sys.stderr)
        return 1

    logger.debug(f"Rendering {len(text)} characters with {engine.mode.name}")
    print(engine.render(text.rstrip("\r\n")))
    return 0


if __name__ == "__main__":
    sys.exit(main())
