import contextlib
import datetime
from pathlib import Path
from typing import Optional

import pytz
from structlog.types import EventDict


def _require_dict(event_dict: EventDict) -> EventDict:
    if not isinstance(event_dict, dict):
        msg = "event_dict must be a dictionary"
        raise TypeError(msg)
    return event_dict


class PathPrettifier:
    """
    Render ``Path`` values relative to a base directory.

    Manifest and media paths are logged constantly; showing them relative to
    the working directory keeps console lines short. Paths outside the base
    directory are left untouched.
    """

    def __init__(self, base_dir: Optional[Path] = None) -> None:
        self.base_dir = base_dir or Path.cwd()

    def __call__(
        self, _: object, __: object, event_dict: EventDict
    ) -> EventDict:
        for key, value in _require_dict(event_dict).items():
            if isinstance(value, Path):
                with contextlib.suppress(ValueError):
                    event_dict[key] = str(value.relative_to(self.base_dir))
        return event_dict


class CallPrettifier:
    """Fold ``module``, ``func_name`` and ``lineno`` into one ``call`` entry.

    Console output gets ``module.func:lineno``; the JSON file keeps the parts.
    """

    def __init__(self, concise: bool = True) -> None:
        self.concise = concise

    def __call__(
        self, _: object, __: object, event_dict: EventDict
    ) -> EventDict:
        _require_dict(event_dict)
        module = event_dict.pop("module", "")
        func_name = event_dict.pop("func_name", "")
        lineno = event_dict.pop("lineno", "")
        if self.concise:
            event_dict["call"] = f"{module}.{func_name}:{lineno}"
        else:
            event_dict["call"] = {
                "module": module,
                "func_name": func_name,
                "lineno": lineno,
            }
        return event_dict


class ZonedTimeStamper:
    """
    Stamp events with the current time in a fixed IANA zone.

    Capture stations record procedure times in local clinic time, so logs are
    stamped in an explicit zone rather than whatever the host is set to.
    """

    def __init__(
        self, fmt: str = "%Y-%m-%dT%H:%M:%S%z", zone: str = "UTC"
    ) -> None:
        self.fmt = fmt
        self.tz = pytz.timezone(zone)

    def __call__(
        self, _: object, __: object, event_dict: EventDict
    ) -> EventDict:
        now = datetime.datetime.now(self.tz)
        _require_dict(event_dict)["timestamp"] = now.strftime(self.fmt)
        return event_dict
