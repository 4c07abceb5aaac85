"""
ClockPanel Client - Main Entry Point

This is the main entry point for the ClockPanel client application.
Handles both GUI and CLI modes depending on command-line arguments.

Author: ClockPanel Project
"""

import sys
import argparse

from version import VERSION


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog='clockpanel',
        description='ClockPanel - Alarm Clock Device Control Client',
        epilog='Run without arguments to launch GUI mode'
    )

    # Optional positional argument for operation (CLI mode)
    parser.add_argument('operation', nargs='?',
                        choices=['upload', 'format', 'set-time', 'list-files', 'play-sound'],
                        help='Operation to perform (CLI mode)')

    parser.add_argument('files', nargs='*',
                        help='Files to upload (upload only)')

    parser.add_argument('--overwrite', action='store_true',
                        help='Replace files that already exist on the device (upload only)')

    # Optional device address override
    parser.add_argument('--device', dest='device_url',
                        help='Device URL (overrides config, e.g. http://192.168.4.1)')
    parser.add_argument('--port', dest='device_port', type=int,
                        help='Device port (overrides config)')

    parser.add_argument('--version', action='version', version=f'%(prog)s {VERSION}')

    return parser


def main(argv=None):
    """
    Main entry point for ClockPanel client.

    Parses command-line arguments and launches either:
    - GUI mode (default when no arguments)
    - CLI mode (when an operation is specified)
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.files and args.operation != 'upload':
        parser.error('files can only be given with the upload operation')

    if args.operation:
        # CLI mode
        from cli import run_cli_operation
        return run_cli_operation(
            args.operation,
            file_paths=args.files,
            overwrite=args.overwrite,
            device_url=args.device_url,
            device_port=args.device_port
        )
    else:
        # GUI mode
        from gui import launch_gui
        launch_gui()
        return 0


if __name__ == '__main__':
    sys.exit(main())
