import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

from conceptsheet.cli.workflow import generate_character_sheet
from conceptsheet.core.catalog import AspectRatio, ChromaColor, Style
from conceptsheet.core.config import DEFAULT_OUTPUT_DIR, configure_logging
from conceptsheet.core.errors import CharacterSheetError


def main():
    """Main entry point for character sheet generation."""
    load_dotenv()
    configure_logging()

    parser = argparse.ArgumentParser(
        description="Generate a three-view character concept sheet from a single photo"
    )
    parser.add_argument(
        "photo",
        type=Path,
        help="Path to the character photo (a clear, well-lit headshot works best)",
    )
    parser.add_argument(
        "--style",
        "-s",
        choices=[style.value for style in Style],
        required=True,
        help="Art style applied to every view",
    )
    parser.add_argument(
        "--ratio",
        "-r",
        choices=[ratio.value for ratio in AspectRatio],
        default=AspectRatio.LANDSCAPE.value,
        help="Aspect ratio of the generated images (default: 16:9)",
    )
    parser.add_argument(
        "--chroma",
        "-c",
        choices=[chroma.value for chroma in ChromaColor],
        default=ChromaColor.GREEN.value,
        help="Chroma key background color (default: green)",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=DEFAULT_OUTPUT_DIR,
        help=f"Directory for the zip archive (default: {DEFAULT_OUTPUT_DIR})",
    )

    args = parser.parse_args()

    style = Style(args.style)
    print(f"Generating {style.display_name} character sheet for: {args.photo}")
    print()

    try:
        archive_path, archive = generate_character_sheet(
            args.photo,
            style,
            AspectRatio(args.ratio),
            ChromaColor(args.chroma),
            args.output,
            on_progress=print,
        )
    except (FileNotFoundError, CharacterSheetError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print()
    print(f"Generated {len(archive.entries) - 1} views")
    print(f"Success! Character sheet saved to: {archive_path.resolve()}")


if __name__ == "__main__":
    main()
