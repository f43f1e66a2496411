#!/usr/bin/env python3
"""
iptvplaylist - Extended M3U playlist parser

Downloads (or reads) a playlist, parses it and prints channels, grouped
listings, search results or playback links as JSON.
"""

import json
import logging
import sys
from pathlib import Path

from .args import ArgumentParser
from .config import ConfigManager
from .downloader import PlaylistDownloader
from .exceptions import PlaylistParserError
from .provider import PlaylistProvider
from . import catalog

# Package version
from . import __version__


def setup_logging(logging_config: dict, log_file: Path):
    """Setup logging configuration according to specified levels"""
    log_file.parent.mkdir(parents=True, exist_ok=True)

    # Determine file logging level based on mode
    if logging_config["level"] == "warning":
        file_level = logging.WARNING
    elif logging_config["level"] == "debug":
        file_level = logging.DEBUG
    else:  # default
        file_level = logging.INFO

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(file_level)
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)-8s %(message)s", datefmt="%Y/%m/%d %H:%M:%S")
    )

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(file_level)
    root_logger.handlers.clear()
    root_logger.addHandler(file_handler)

    # Console logging only if --console is specified (and not --quiet)
    # Use stderr to avoid polluting JSON output on stdout
    if logging_config["console"] and not logging_config["quiet"]:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(file_level)
        console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
        root_logger.addHandler(console_handler)

    return file_handler


def write_output(data, output: Path = None):
    """Write JSON to the output file or stdout"""
    text = json.dumps(data, ensure_ascii=False, indent=2)
    if output is None:
        print(text)
    else:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(text + "\n", encoding="utf-8")
        logging.info("JSON output written to: %s", output)


def list_playlist(provider: PlaylistProvider, args):
    """Parse the playlist from --file or the provider URL and shape the listing"""
    if args.file is not None:
        logging.info("Reading playlist from file: %s", args.file)
        with open(args.file, "rb") as f:
            playlist = provider.parser.parse(f)
    else:
        playlist = provider.fetch_playlist()

    if args.groups:
        return [group.to_dict() for group in catalog.build_main_page(playlist)]
    if args.search is not None:
        return [entry.to_dict() for entry in catalog.search(playlist, args.search)]
    return playlist.to_list()


def main(argv=None):
    """Main application entry point"""
    try:
        arg_parser = ArgumentParser()
        args = arg_parser.parse_args(argv)

        defaults = arg_parser.get_system_defaults(args.basedir)
        config_file = args.config_file or defaults["config_file"]

        config_manager = ConfigManager(config_file)
        config_manager.load_config(playlist_url=args.url, timeout=args.timeout)

        logging_config = arg_parser.get_logging_config(args)
        setup_logging(logging_config, defaults["log_file"])

        logging.info("=" * 60)
        logging.info("iptvplaylist session started - Version %s", __version__)
        config_manager.log_config_summary()

        downloader = PlaylistDownloader(
            timeout=config_manager.get_timeout(),
            max_retries=config_manager.get_retries(),
            user_agent=config_manager.get_user_agent(),
        )

        with PlaylistProvider(
            main_url=config_manager.get_playlist_url(),
            name=config_manager.get_provider_name(),
            downloader=downloader,
        ) as provider:
            if args.links is not None:
                stream_links = provider.load_links(args.links)
                logging.info("%d playback links built", len(stream_links))
                result = [link.to_dict() for link in stream_links]
            else:
                result = list_playlist(provider, args)

            write_output(result, args.output)

        logging.info("iptvplaylist session ended successfully")
        logging.info("=" * 60)
        return 0

    except KeyboardInterrupt:
        logging.info("Interrupted by user")
        return 1
    except PlaylistParserError as e:
        logging.error("%s", str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        logging.exception("Critical error: %s", str(e))
        logging.info("iptvplaylist session ended with error")
        return 1


if __name__ == "__main__":
    sys.exit(main())
