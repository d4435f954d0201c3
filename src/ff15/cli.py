"""
Interactive command-line interface for the ff15 file finder.

The interface is a small state machine. The directory root is asked for once;
after that the user searches, reads the matches and either reveals the exactly
named file in the file manager or exits. All state lives in a FinderSession
passed from one step to the next.
"""

import os
import sys
import time
import argparse
import logging
from typing import Callable, List, Optional, TextIO

from . import __version__
from .config import load_config
from .errors import ConfigurationError, RevealError
from .models.config import FinderConfig
from .models.search_query import SearchQuery
from .models.session import FinderSession, SessionState
from .tools.fs_walker import FSWalker
from .tools.reveal import FileRevealer, get_revealer


logger = logging.getLogger(__name__)


BANNER = r"""
   ___  ___  _  ____
  / __\/ __\/ || ___|
 / _\ / _\  | ||___ \
/ /  / /    | | ___) |
\/   \/     |_||____/

"""

CLEAR_SCREEN = "\033[H\033[2J"
GREEN = "\033[32m"
RED = "\033[31m"
RESET = "\033[0m"

DIRECTORY_PROMPT = "Enter the directory path: (ex. D:\\Games\\) "
QUERY_PROMPT = "Enter the file name: (ex. virmox.txt)  "
ACTION_PROMPT = "[1] to open the file \n[2] to exit\n"

OPEN_SELECTOR = 1
EXIT_SELECTOR = 2


class TokenReader:
    """
    Reads whitespace-delimited tokens from a text stream.

    Several tokens typed on one line are handed out one at a time; blank
    lines are skipped while waiting for a token.
    """

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream if stream is not None else sys.stdin
        self._pending: List[str] = []

    def read_token(self) -> str:
        """
        Return the next token.

        Raises:
            EOFError: If the stream is exhausted
        """
        while not self._pending:
            line = self.stream.readline()
            if not line:
                raise EOFError("end of input")
            self._pending = line.split()
        return self._pending.pop(0)

    def read_line(self) -> str:
        """
        Return the rest of the current line, or the next line.

        Raises:
            EOFError: If the stream is exhausted
        """
        if self._pending:
            rest = " ".join(self._pending)
            self._pending = []
            return rest
        line = self.stream.readline()
        if not line:
            raise EOFError("end of input")
        return line.rstrip("\r\n")


class FinderApp:
    """
    The interactive search loop.

    Collaborators are injectable so the loop can run against in-memory
    streams: ``walker`` searches, ``revealer`` opens the file manager and
    ``sleep`` provides the pause before exiting.
    """

    def __init__(self, config: Optional[FinderConfig] = None,
                 input_stream: Optional[TextIO] = None,
                 output: Optional[TextIO] = None,
                 walker: Optional[FSWalker] = None,
                 revealer: Optional[FileRevealer] = None,
                 sleep: Callable[[float], None] = time.sleep):
        self.config = config if config is not None else FinderConfig()
        self.reader = TokenReader(input_stream)
        self.output = output if output is not None else sys.stdout
        self.walker = walker if walker is not None else FSWalker(self.config, stream=self.output)
        self.revealer = revealer if revealer is not None else get_revealer(self.config.file_manager)
        self.sleep = sleep
        self._default_root_pending = self.config.search.default_root is not None

    def run(self, session: Optional[FinderSession] = None) -> int:
        """
        Run the loop until the user exits.

        Args:
            session: Session to resume (a new one is created when omitted)

        Returns:
            Process exit status
        """
        session = session if session is not None else FinderSession()
        handlers = {
            SessionState.AWAIT_DIRECTORY: self.await_directory,
            SessionState.AWAIT_QUERY: self.await_query,
            SessionState.AWAIT_ACTION: self.await_action,
        }

        self._print(BANNER)
        try:
            while not session.is_finished():
                session.state = handlers[session.state](session)
        except (EOFError, KeyboardInterrupt):
            logger.info("Input closed, leaving")
            self._print()
            self._print("Goodbye")
            session.state = SessionState.EXIT

        return session.exit_code

    def await_directory(self, session: FinderSession) -> SessionState:
        """Ask for the directory root until an existing path is given."""
        if self._default_root_pending:
            self._default_root_pending = False
            candidate = self.config.search.default_root
            self._print(f"Using directory: {candidate}")
        else:
            self._prompt(DIRECTORY_PROMPT)
            candidate = self.reader.read_token()

        message = check_directory(candidate)
        if message:
            self._clear()
            self._error(message)
            return SessionState.AWAIT_DIRECTORY

        session.set_root(candidate)
        logger.info(f"Searching under {candidate}")
        return SessionState.AWAIT_QUERY

    def await_query(self, session: FinderSession) -> SessionState:
        """Ask for a search term, walk the root and show the matches."""
        self._prompt(QUERY_PROMPT)
        query = SearchQuery(text=self.reader.read_token())

        result = self.walker.walk(session.root, query)
        session.record_search(query, result)

        if result.has_error():
            self._clear()
            self._print("Could not find files ")
            self._wait()

        if result.is_empty():
            self._clear()
            self._print("Exactly named file not found ")
            self._wait()
        else:
            self._clear()
            self._print("Files found: ")
            for path in result.paths:
                self._print(path)

        if self.config.display.show_raw_results:
            self._print(str(result.paths))

        return SessionState.AWAIT_ACTION

    def await_action(self, session: FinderSession) -> SessionState:
        """Ask whether to reveal the exactly named file or to exit."""
        self._prompt(ACTION_PROMPT)
        token = self.reader.read_token()
        try:
            selector = int(token)
        except ValueError:
            selector = None

        if selector == OPEN_SELECTOR:
            self.reveal_matches(session)
            return SessionState.AWAIT_QUERY

        if selector == EXIT_SELECTOR:
            self._clear()
            self._print("Goodbye")
            self.sleep(self.config.display.exit_delay_seconds)
            session.exit_code = 0
            return SessionState.EXIT

        self._error(f"Invalid option: {token}")
        return SessionState.AWAIT_QUERY

    def reveal_matches(self, session: FinderSession) -> int:
        """
        Reveal every exactly named match of the last search.

        A failure is reported and the remaining matches are still attempted.

        Returns:
            Number of reveal attempts
        """
        matches = session.result.exact_matches() if session.result else []
        if not matches:
            logger.info(f"No file named exactly '{session.query.text if session.query else ''}'")

        for path in matches:
            folder = os.path.dirname(path)
            try:
                self.revealer.reveal(path)
            except RevealError as e:
                logger.info(f"Could not reveal {path}: {e}")
                self._clear()
                self._print(f"Error opening folder:  {e} ( {folder} )")
                self._wait()
            else:
                self._clear()
                self._print("Opening folder...")
                self._wait()

        return len(matches)

    def _print(self, text: str = "") -> None:
        self._write(text + "\n")

    def _prompt(self, text: str) -> None:
        self._write(self._color(text, GREEN))

    def _write(self, text: str) -> None:
        try:
            self.output.write(text)
        except UnicodeEncodeError:
            # Undecodable file names arrive as surrogate escapes
            encoding = getattr(self.output, "encoding", None) or "utf-8"
            text = text.encode("utf-8", "surrogateescape").decode("utf-8", "replace")
            self.output.write(text.encode(encoding, "replace").decode(encoding))
        self.output.flush()

    def _error(self, text: str) -> None:
        self._print(self._color(text, RED))

    def _color(self, text: str, color: str) -> str:
        if not self.config.display.use_color:
            return text
        return f"{color}{text}{RESET}"

    def _clear(self) -> None:
        if self.config.display.clear_screen:
            self._write(CLEAR_SCREEN)

    def _wait(self) -> None:
        self.reader.read_line()


def check_directory(path: str) -> Optional[str]:
    """
    Check that a directory root exists.

    Any existing filesystem entry is accepted.

    Returns:
        None when the path exists, otherwise the message to show
    """
    try:
        os.stat(path)
    except FileNotFoundError:
        return "Directory does not exist"
    except OSError as e:
        logger.info(f"Cannot access {path}: {e}")
        return "Error accessing directory"
    return None


def setup_logging(config: FinderConfig, verbose: bool = False) -> None:
    """
    Configure the root logger from the logging section.

    Records go to the configured file or to stderr, never to stdout where
    the interactive display lives.
    """
    level = logging.DEBUG if verbose else getattr(logging, config.logging.level.value)
    if config.logging.file:
        logging.basicConfig(level=level, format=config.logging.format,
                            filename=config.logging.file, encoding='utf-8')
    else:
        logging.basicConfig(level=level, format=config.logging.format, stream=sys.stderr)


def configure_stdout() -> None:
    """Let stdout pass undecodable file name bytes through unchanged."""
    reconfigure = getattr(sys.stdout, "reconfigure", None)
    if reconfigure is not None:
        reconfigure(errors="surrogateescape")


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ff15",
        description="Find files by name in a directory tree and reveal them in the file manager."
    )
    parser.add_argument("--config", metavar="PATH", help="YAML configuration file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug details to stderr")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point of the ``ff15`` command."""
    args = build_arg_parser().parse_args(argv)

    try:
        parse_result = load_config(args.config)
    except ConfigurationError as e:
        print(f"ff15: {e}", file=sys.stderr)
        return 2

    config = parse_result.config
    setup_logging(config, verbose=args.verbose)
    configure_stdout()
    for warning in parse_result.warnings:
        if parse_result.is_default:
            logger.debug(warning)
        else:
            logger.warning(warning)

    return FinderApp(config).run()
