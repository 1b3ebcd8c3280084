import base64
import logging
import os
import re
import threading
from typing import Callable, FrozenSet, Iterable, List

logger = logging.getLogger(__name__)

MASK_CHAR = "*"


def _censor_for(secrets: Iterable[str]) -> Callable[[str], str]:
    """
    Builds a function that replaces every occurrence of any of the secrets,
    or their base64 encoding, with a mask of the same length.
    """
    needles = set()
    for secret in secrets:
        if not secret:
            continue
        needles.add(secret)
        needles.add(base64.standard_b64encode(secret.encode()).decode())
    if not needles:
        return lambda text: text
    # longest first so that a secret containing another one is masked as a whole
    pattern = re.compile("|".join(re.escape(needle) for needle in sorted(needles, key=lambda n: (-len(n), n))))
    return lambda text: pattern.sub(lambda match: MASK_CHAR * len(match.group(0)), text)


class DynamicCensor:
    """
    Keeps a list of censored secrets that is dynamically updated.
    Used when the list of secrets to censor is updated during the execution of
    the program and cannot be determined in advance. Access to the list of
    secrets is internally synchronized.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._secrets: FrozenSet[str] = frozenset()
        self._censor = _censor_for(self._secrets)

    @property
    def secrets(self) -> List[str]:
        return sorted(self._secrets)

    def add_secrets(self, *secrets: str):
        """ Adds the content of one or more secrets to the censor list """
        with self._lock:
            updated = self._secrets.union(s for s in secrets if s)
            if updated == self._secrets:
                return
            censor = _censor_for(updated)
            self._secrets, self._censor = updated, censor
        logger.debug("Censoring %d secret(s)", len(updated))

    def redact(self, text: str) -> str:
        # the censor is replaced as a whole, never mutated
        censor = self._censor
        return censor(text)


def read_from_env(name: str, censor: DynamicCensor) -> str:
    """ Loads an environment variable and adds it to the censor list """
    value = os.environ.get(name, "")
    if value:
        censor.add_secrets(value)
    return value


def read_from_file(path: str, censor: DynamicCensor) -> str:
    """
    Loads content from a file and adds it to the censor list.
    Surrounding whitespace is stripped. Raises OSError if the file can't be read.
    """
    with open(path, "r", encoding="utf-8") as f:
        value = f.read().strip()
    if value:
        censor.add_secrets(value)
    return value


class CensoringFilter(logging.Filter):
    """ Masks secrets known to a DynamicCensor in log records """

    def __init__(self, censor: DynamicCensor):
        super().__init__()
        self.censor = censor

    def filter(self, record: logging.LogRecord) -> bool:
        try:
            message = record.getMessage()
        except (TypeError, ValueError):
            # leave malformed records for Handler.handleError to report
            return True
        redacted = self.censor.redact(message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True
