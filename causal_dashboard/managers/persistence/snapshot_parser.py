import json
import math

from ...models.exceptions import SnapshotParseError
from ...utils.logger.logger import Logger


def _reject_constant(name):
    """json.loads hook for NaN, Infinity and -Infinity, which are not JSON."""
    raise SnapshotParseError(f"Snapshot contains the non-JSON literal {name}.")


def _parse_finite_float(text):
    value = float(text)
    if not math.isfinite(value):
        raise SnapshotParseError(f"Snapshot number {text} is out of range.")
    return value


class SnapshotDataStrategy:
    """Interface for turning raw snapshot bytes into a payload mapping."""

    def process(self, data):
        """Return the parsed payload for `data`."""
        raise NotImplementedError()


class JsonSnapshotStrategy(SnapshotDataStrategy):
    """Parse a JSON snapshot document."""

    def process(self, data):
        """
        Decode and parse `data` (bytes or str).

        Raises:
            SnapshotParseError: If the data is not UTF-8 JSON with an object at the top level.
        """
        Logger.log(f"start JsonSnapshotStrategy.process({len(data)} bytes)")
        if isinstance(data, (bytes, bytearray)):
            try:
                text = bytes(data).decode("utf-8-sig")
            except UnicodeDecodeError as ex:
                Logger.log(f"snapshot is not UTF-8: {ex}", Logger.LogPriority.ERROR)
                raise SnapshotParseError(f"Snapshot is not UTF-8 text: {ex}")
        else:
            text = data

        try:
            payload = json.loads(text, parse_constant=_reject_constant,
                                 parse_float=_parse_finite_float)
        except json.JSONDecodeError as ex:
            Logger.log(f"snapshot is not valid JSON: {ex}", Logger.LogPriority.ERROR)
            raise SnapshotParseError(f"Snapshot is not valid JSON: {ex}")
        except SnapshotParseError as ex:
            Logger.log(f"snapshot is not valid JSON: {ex}", Logger.LogPriority.ERROR)
            raise

        if not isinstance(payload, dict):
            Logger.log(f"snapshot root is {type(payload).__name__}, expected object",
                       Logger.LogPriority.ERROR)
            raise SnapshotParseError("Snapshot root must be a JSON object.")

        Logger.log(f"end JsonSnapshotStrategy.process: keys={sorted(payload)}")
        return payload
