"""
iptvplaylist.args - Command line argument parsing
"""

import argparse
import sys
from pathlib import Path


class ArgumentParser:
    """Command line argument parser"""

    def __init__(self):
        self.parser = self._create_parser()

    def _create_parser(self):
        """Create the argument parser"""
        parser = argparse.ArgumentParser(
            prog="iptvplaylist",
            description="Extended M3U playlist parser for live TV channels",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  iptvplaylist                                      # All channels from configured playlist
  iptvplaylist --url https://example.com/tv.m3u     # Override playlist location
  iptvplaylist --file channels.m3u --groups         # Local file, grouped by group-title
  iptvplaylist --search news --console              # Search channel titles
  iptvplaylist --links '{"url": "...", ...}'        # Playback links for a catalog payload

Configuration:
  Default config: ~/iptvplaylist/conf/iptvplaylist.xml
  Default logs:   ~/iptvplaylist/log/

Logging Levels:
  (default)       Info, warnings and errors to file only, JSON to console
  --warning       Only warnings and errors to file
  --debug         All debug information to file
  --console       Display active log level to console (can combine with --warning/--debug)
  --quiet         No console output except JSON, logs to file only
            """,
        )

        parser.add_argument("--version", "-v", action="store_true", help="Show version and exit")

        # Log level selection
        level_group = parser.add_mutually_exclusive_group()
        level_group.add_argument(
            "--warning", "-w", action="store_true", help="Only warnings and errors to file"
        )
        level_group.add_argument(
            "--debug", action="store_true", help="All debug information to file (very verbose)"
        )

        # Console output control
        console_group = parser.add_mutually_exclusive_group()
        console_group.add_argument(
            "--console",
            action="store_true",
            help="Display active log level to console (can combine with --warning/--debug)",
        )
        console_group.add_argument(
            "--quiet",
            "-q",
            action="store_true",
            help="No console output except JSON, logs to file only",
        )

        # Playlist source
        source_group = parser.add_mutually_exclusive_group()
        source_group.add_argument("--url", type=str, help="Playlist URL (overrides configuration)")
        source_group.add_argument("--file", type=Path, help="Read playlist from a local file")

        # Actions
        action_group = parser.add_mutually_exclusive_group()
        action_group.add_argument(
            "--groups", action="store_true", help="Show channels grouped by group-title"
        )
        action_group.add_argument("--search", type=str, metavar="QUERY", help="Search channel titles")
        action_group.add_argument(
            "--links", type=str, metavar="PAYLOAD", help="Show playback links for a catalog payload"
        )

        # Output control
        parser.add_argument(
            "--output", "-o", type=Path, help="Redirect JSON output to specified file"
        )

        parser.add_argument(
            "--timeout", type=int, metavar="SECONDS", help="HTTP timeout in seconds (1-300)"
        )

        # Configuration
        parser.add_argument("--config-file", type=Path, help="Configuration file path")
        parser.add_argument("--basedir", type=Path, help="Base directory for config and logs")

        return parser

    def parse_args(self, args=None):
        """Parse command line arguments"""
        args = self.parser.parse_args(args)

        if args.version:
            from . import __version__
            print(__version__)
            sys.exit(0)

        self._validate_args(args)
        return args

    def _validate_args(self, args):
        """Validate argument values"""
        if args.timeout is not None:
            if args.timeout < 1 or args.timeout > 300:
                self.parser.error(f"Parameter [--timeout] must be 1-300, got: {args.timeout}")

        if args.search is not None and not args.search.strip():
            self.parser.error("Parameter [--search] cannot be empty")

        if args.url is not None and not args.url.strip():
            self.parser.error("Parameter [--url] cannot be empty")

    def get_logging_config(self, args):
        """Determine logging configuration from arguments"""
        config = {
            "level": "default",
            "console": False,
            "quiet": False,
        }

        if args.debug:
            config["level"] = "debug"
        elif args.warning:
            config["level"] = "warning"

        if args.console:
            config["console"] = True
        elif args.quiet:
            config["quiet"] = True

        return config

    def get_system_defaults(self, basedir_override: Path = None):
        """Get default directories"""
        base_dir = Path(basedir_override) if basedir_override else Path.home() / "iptvplaylist"

        return {
            "base_dir": base_dir,
            "conf_dir": base_dir / "conf",
            "log_dir": base_dir / "log",
            "config_file": base_dir / "conf" / "iptvplaylist.xml",
            "log_file": base_dir / "log" / "iptvplaylist.log",
        }
