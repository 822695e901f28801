"""A very tiny CLI.

Invoke using e.g. ``python -m fontwrap version`` or ``python -m fontwrap styles DejaVu Sans``.
"""

import sys
import argparse

import fontwrap


def main(argv=None):
    # Get argv so we can massage it
    if argv is None:
        argv = sys.argv[1:]

    # Defaults and aliases
    if not argv:
        argv = ["help"]
    if argv == ["--version"]:
        argv = ["version"]

    parser = argparse.ArgumentParser(
        prog="fontwrap",
        description="The (very basic) fontwrap CLI",
    )
    parser.add_argument(
        "command",
        action="store",
        help="The command to run: 'help', 'version', 'fonts' or 'styles'",
    )
    parser.add_argument(
        "family", nargs="*", help="The font family for the 'styles' command"
    )

    args = parser.parse_args(argv)
    command = args.command.lower()

    if command == "help":
        parser.print_help()
    elif command == "version":
        print("fontwrap v" + fontwrap.__version__)
    elif command == "fonts":
        for family in fontwrap.list_font_families():
            print(family)
    elif command == "styles":
        return _print_styles(" ".join(args.family))
    else:
        print(f"Invalid command '{command}'")
        return 1
    return 0


def _print_styles(family):
    if not family:
        print("The 'styles' command needs a font family")
        return 1
    try:
        config = fontwrap.FontConfig(family, 16)
    except fontwrap.FontError as err:
        print(err)
        return 1
    for style, face in config.faces.items():
        print(f"{str(style):<12} {face.full_name} ({face.filename})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
