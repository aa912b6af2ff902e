"""
Multi-purpose logger used by oshiv_installer. Every record is written as a single JSON line.
"""

import inspect
import logging
import os
from datetime import datetime

from pydantic import BaseModel


class LogLine(BaseModel):
    """
    Represents a line in the installer log
    """

    time: str
    level: str
    caller_file: str
    caller_name: str
    caller_line: int
    message: str


class InstallerLogger:
    """
    Logger class
    """

    def __init__(self, level: int = logging.INFO) -> None:
        self.logger = logging.getLogger("oshiv_installer")
        self.logger.setLevel(level)

    def log(self, debug_message: str, level: int) -> None:
        """
        Log the message as a JSON line, tagged with the calling function.
        """
        debug_message = debug_message.replace("\n", " ")

        caller_file = ""
        caller_name = ""
        caller_line = 0
        frame = inspect.currentframe()
        if frame is not None and frame.f_back is not None:
            caller = frame.f_back
            caller_file = os.path.basename(caller.f_code.co_filename)
            caller_name = caller.f_code.co_name
            caller_line = caller.f_lineno
        del frame

        self.logger.log(
            level=level,
            msg=LogLine(
                time=str(datetime.now()),
                level=logging.getLevelName(level),
                caller_file=caller_file,
                caller_name=caller_name,
                caller_line=caller_line,
                message=debug_message,
            ).model_dump_json(),
        )
