#!/usr/bin/env python3
"""
cal-session - list, create, edit and delete upcoming Apple Calendar events.
"""

import argparse
import logging
import sys

from cal_session.utils.macos import set_process_name
from cal_session.core.config import load_config, get_default_config_path, get_log_dir
from cal_session.core.exceptions import ConfigurationError
from cal_session.commands import (
    StatusCommand,
    AccessCommand,
    SettingsCommand,
    ListCommand,
    CreateCommand,
    UpdateCommand,
    DeleteCommand,
    EditCommand
)


def main(argv=None):
    """Main entry point for cal-session."""
    set_process_name("cal-session")

    parser = argparse.ArgumentParser(
        description="Manage upcoming Apple Calendar events",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  cal-session grant                                  # Ask for calendar access
  cal-session list                                   # Events in the next 30 days
  cal-session create "Standup" --start "2026-01-15 09:00"
  cal-session update <id> --title "Renamed"
  cal-session delete <id>
  cal-session edit <id>                              # Edit in the Calendar app
        """
    )

    default_config = get_default_config_path()

    parser.add_argument(
        '--config',
        help=f'Path to configuration file (default: {default_config})',
        default=None
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Verbose output'
    )

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    subparsers.add_parser('status', help='Show calendar access status')
    subparsers.add_parser('grant', help='Request calendar access')
    subparsers.add_parser('settings', help='Open the calendar privacy settings')
    subparsers.add_parser('list', help='List upcoming events')

    create_parser = subparsers.add_parser('create', help='Create an event')
    create_parser.add_argument('title', help='Event title')
    create_parser.add_argument('--start', help='Start (YYYY-MM-DD HH:MM, default: now)')
    create_parser.add_argument('--end', help='End (default: start plus the configured duration)')
    create_parser.add_argument('--notes', help='Optional notes')

    update_parser = subparsers.add_parser('update', help='Change fields of an event')
    update_parser.add_argument('event_id', help='Event identifier (see list)')
    update_parser.add_argument('--title', help='New title')
    update_parser.add_argument('--start', help='New start (YYYY-MM-DD HH:MM)')
    update_parser.add_argument('--end', help='New end (YYYY-MM-DD HH:MM)')
    update_parser.add_argument('--notes', help='New notes (pass "" to clear them)')

    delete_parser = subparsers.add_parser('delete', help='Delete an event')
    delete_parser.add_argument('event_id', help='Event identifier (see list)')
    delete_parser.add_argument(
        '--yes', '-y',
        action='store_true',
        help='Do not ask for confirmation'
    )

    edit_parser = subparsers.add_parser('edit', help='Edit an event in the Calendar app')
    edit_parser.add_argument('event_id', nargs='?', help='Event identifier (omit for a new event)')

    args = parser.parse_args(argv)

    # Configure logging if verbose mode is enabled
    if args.verbose:
        log_file = get_log_dir() / "cal-session.log"
        logging.basicConfig(
            level=logging.DEBUG,
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            handlers=[logging.StreamHandler(), logging.FileHandler(log_file)]
        )

    # Show help if no command specified
    if not args.command:
        parser.print_help()
        return 1

    try:
        config = load_config(args.config)
    except ConfigurationError as e:
        print(f"Error: {e}")
        return 1

    if args.verbose:
        actual_config_path = args.config if args.config else get_default_config_path()
        print(f"Using config: {actual_config_path}")

    try:
        if args.command == 'status':
            success = StatusCommand(config, verbose=args.verbose).run()

        elif args.command == 'grant':
            success = AccessCommand(config, verbose=args.verbose).run()

        elif args.command == 'settings':
            success = SettingsCommand(config, verbose=args.verbose).run()

        elif args.command == 'list':
            success = ListCommand(config, verbose=args.verbose).run()

        elif args.command == 'create':
            cmd = CreateCommand(config, verbose=args.verbose)
            success = cmd.run(
                title=args.title,
                start=args.start,
                end=args.end,
                notes=args.notes
            )

        elif args.command == 'update':
            cmd = UpdateCommand(config, verbose=args.verbose)
            success = cmd.run(
                event_id=args.event_id,
                title=args.title,
                start=args.start,
                end=args.end,
                notes=args.notes
            )

        elif args.command == 'delete':
            cmd = DeleteCommand(config, verbose=args.verbose)
            success = cmd.run(event_id=args.event_id, assume_yes=args.yes)

        elif args.command == 'edit':
            cmd = EditCommand(config, verbose=args.verbose)
            success = cmd.run(event_id=args.event_id)

        else:
            print(f"Unknown command '{args.command}'.")
            return 1

        return 0 if success else 1

    except KeyboardInterrupt:
        print("\nOperation cancelled by user.")
        return 130
    except Exception as e:
        print(f"Error: {e}")
        if not args.verbose:
            print("Re-run with --verbose for more detail.")
        else:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == '__main__':
    sys.exit(main())
