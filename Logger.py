"""
Logger.py - Terminal and file output duplication

Author      : Breno Farias da Silva
Created     : 2026-10-14
Description :
    `Logger` is a file-like object that writes everything it receives to the
    terminal and appends it to a log file with ANSI color codes removed.
    Assign an instance to `sys.stdout` and `sys.stderr` to keep a log of a
    whole run without changing any `print` call.

Usage:
    logger = Logger("./Logs/main.log", clean=True)
    sys.stdout = logger
    sys.stderr = logger
"""


import os  # For creating the log directory
import re  # For stripping ANSI color codes
import sys  # For the original terminal stream


# Macros:
ANSI_ESCAPE_PATTERN = re.compile(r"\x1b\[[0-9;]*[A-Za-z]")  # Color and cursor escape sequences


# Classes Definitions:


class Logger:
    """
    Duplicates writes to the terminal and to a log file.
    """


    def __init__(self, logfile_path, clean=False, terminal=None):
        """
        :param logfile_path: Path of the log file
        :param clean: When True, truncate the log file instead of appending to it
        :param terminal: Stream that receives the colored output (defaults to the real stdout)
        :return: None
        """

        self.logfile_path = logfile_path  # Path of the log file
        self.terminal = terminal or sys.__stdout__  # Real terminal, even if sys.stdout was already replaced

        log_directory = os.path.dirname(logfile_path)  # Directory part of the log path
        if log_directory:  # A bare file name logs to the working directory
            os.makedirs(log_directory, exist_ok=True)  # Logs directory may not exist yet

        self.logfile = open(logfile_path, "w" if clean else "a", encoding="utf-8")  # Truncate or append


    def write(self, message):
        """
        Writes a message to the terminal and, without colors, to the log file.

        :param message: Text to write
        :return: Number of characters written
        """

        self.terminal.write(message)  # Colored output for the user
        if not self.logfile.closed:  # Late writes after close only reach the terminal
            self.logfile.write(ANSI_ESCAPE_PATTERN.sub("", message))  # Plain text for the log
            self.logfile.flush()  # Keep the log usable if the run is killed
        return len(message)


    def flush(self):
        self.terminal.flush()  # Flush the terminal stream
        if not self.logfile.closed:  # Closed files cannot be flushed
            self.logfile.flush()


    def isatty(self):
        return False  # Libraries must not emit terminal control sequences into the log


    def close(self):
        """
        Closes the log file. The terminal stream is left open.

        :return: None
        """

        if not self.logfile.closed:  # Closing twice is harmless
            self.logfile.close()
