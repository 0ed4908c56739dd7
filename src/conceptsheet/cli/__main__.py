#!/usr/bin/env python3
"""Terminal-based CLI for the Character Concept Generator."""

import sys
from enum import Enum
from pathlib import Path

from dotenv import load_dotenv

from conceptsheet.cli.workflow import generate_character_sheet
from conceptsheet.core.catalog import CHARACTER_VIEWS, AspectRatio, ChromaColor, Style
from conceptsheet.core.config import DEFAULT_OUTPUT_DIR, configure_logging
from conceptsheet.core.errors import CharacterSheetError


def print_header() -> None:
    """Print the CLI header."""
    print("\n" + "=" * 60)
    print("  🎨 Character Concept Generator CLI")
    print("  One photo in, a three-view concept sheet out")
    print("=" * 60)


def print_help() -> None:
    """Print available commands."""
    print("""
Available Commands:
  create    - Generate a character sheet from a photo
  styles    - View available art styles and views
  help      - Show this help message
  exit      - Exit the application
  quit      - Exit the application
""")


def show_styles() -> None:
    """Display the style catalog and the rendered views."""
    print(f"\nArt Styles ({len(Style)} items)")
    print("-" * 50)

    for i, style in enumerate(Style, 1):
        print(f"\n{i}. {style.display_name}")
        print(f"   Key: {style.value}")
        print(f"   Prompt: {style.prompt[:80]}...")

    print("\nViews rendered for every sheet:")
    for view in CHARACTER_VIEWS:
        print(f"  - {view.display_name}")


def get_choice(title: str, options: list[tuple[Enum, str]]) -> Enum:
    """Prompt for one option from a numbered list; the first is the default."""
    print(f"\n{title}:")
    for i, (_, text) in enumerate(options, 1):
        suffix = " (default)" if i == 1 else ""
        print(f"  {i}. {text}{suffix}")

    choice = input("\nEnter choice [1]: ").strip()

    if choice.isdigit() and 1 <= int(choice) <= len(options):
        return options[int(choice) - 1][0]
    return options[0][0]


def create_sheet() -> None:
    """Create a new character sheet interactively."""
    print("\n" + "-" * 40)
    print("Create Character Sheet")
    print("-" * 40)

    print("\nPath to the character photo:")
    raw_path = input("> ").strip().strip('"')

    if not raw_path:
        print("Error: Please provide the path to a photo.")
        return

    style = get_choice("Select art style", [(s, s.display_name) for s in Style])
    aspect_ratio = get_choice("Select aspect ratio", [(r, r.value) for r in AspectRatio])
    chroma = get_choice(
        "Select background", [(c, f"{c.display_name} ({c.hex_value})") for c in ChromaColor]
    )

    print("\nGenerating character sheet...")
    print("This may take a minute.\n")

    try:
        archive_path, archive = generate_character_sheet(
            Path(raw_path).expanduser(),
            style,
            aspect_ratio,
            chroma,
            DEFAULT_OUTPUT_DIR,
            on_progress=lambda caption: print(f"  {caption}"),
        )
    except (FileNotFoundError, CharacterSheetError) as e:
        print(f"\nError generating character sheet: {e}")
        return

    print("\n" + "=" * 50)
    print("CHARACTER SHEET GENERATED SUCCESSFULLY")
    print("=" * 50)
    print(f"\nArchive: {archive_path}")
    print("Contents:")
    for entry in archive.entries:
        print(f"  - {entry}")


def main() -> None:
    """Main CLI loop."""
    # Load environment variables
    load_dotenv()
    configure_logging("WARNING")

    print_header()
    print_help()

    while True:
        try:
            command = input("\n🎨 sheet> ").strip().lower()

            if command in ("exit", "quit", "q"):
                print("\nGoodbye!")
                sys.exit(0)

            elif command in ("help", "h", "?"):
                print_help()

            elif command == "styles":
                show_styles()

            elif command == "create":
                create_sheet()

            elif command == "":
                continue

            else:
                print(f"Unknown command: {command}")
                print("Type 'help' for available commands.")

        except KeyboardInterrupt:
            print("\n\nInterrupted. Type 'exit' to quit.")
        except EOFError:
            print("\nGoodbye!")
            sys.exit(0)


if __name__ == "__main__":
    main()
