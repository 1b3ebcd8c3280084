import enum
import functools
import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterator, List, NamedTuple, Optional

from pytgconfig.exceptions import ReleaseConfigError

logger = logging.getLogger(__name__)


class PublishMode(enum.Enum):
    """ How a release controller publishes its payloads. The value is the product name. """
    MIRRORED_IMAGE_STREAM = "okd"
    TAGGED_RELEASE = "ocp"

    @property
    def product(self) -> str:
        return self.value


class PublishTarget(NamedTuple):
    mode: PublishMode
    version: str

    @property
    def product(self) -> str:
        return self.mode.product


class VerificationJob(NamedTuple):
    name: str
    optional: bool


def _get(data: Any, *keys: str, kind: type = str) -> Any:
    """
    Looks up a nested value. Missing or null entries yield None.
    Raises ValueError if an entry on the way is not an object or the value is not of the given kind.
    """
    seen = []
    for key in keys:
        if not isinstance(data, dict):
            raise ValueError(f"{'.'.join(seen) or 'value'} must be an object")
        data = data.get(key)
        seen.append(key)
        if data is None:
            return None
    if not isinstance(data, kind):
        raise ValueError(f"{'.'.join(seen)} must be of type {kind.__name__}")
    return data


class ReleaseConfig:
    """ The subset of a release controller config needed to build TestGrid dashboards """

    def __init__(self, data: Dict[str, Any], path: Optional[Path] = None):
        self.data = data
        self.path = path

    @classmethod
    def from_file(cls, path: Path):
        try:
            with open(path, "rb") as f:
                content = f.read()
        except OSError as e:
            raise ReleaseConfigError(f"could not read release controller config at {path}: {e}") from e
        try:
            data = json.loads(content.decode("utf-8"))
        except ValueError as e:
            # UnicodeDecodeError is a ValueError as well
            raise ReleaseConfigError(f"could not unmarshal release controller config at {path}: {e}") from e
        if not isinstance(data, dict):
            raise ReleaseConfigError(f"could not unmarshal release controller config at {path}: expected an object")
        release_config = cls(data, path=path)
        release_config.validate()
        return release_config

    def _invalid(self, e: ValueError) -> ReleaseConfigError:
        return ReleaseConfigError(f"could not unmarshal release controller config at {self.path}: {e}")

    def validate(self):
        """ Raises ReleaseConfigError if the fields we rely on have the wrong shape """
        self.publish_target
        self.verification_jobs

    @functools.cached_property
    def publish_target(self) -> Optional[PublishTarget]:
        """
        Determines where this release is published to.
        The mirror destination wins over the tag destination when both are present.
        Returns None if neither is configured.
        """
        try:
            mirror = _get(self.data, "publish", "mirror-to-origin", "imageStreamRef", "name")
            tag = _get(self.data, "publish", "tag", "tagRef", "name")
        except ValueError as e:
            raise self._invalid(e) from e
        if mirror:
            return PublishTarget(PublishMode.MIRRORED_IMAGE_STREAM, mirror)
        if tag:
            return PublishTarget(PublishMode.TAGGED_RELEASE, tag)
        return None

    @functools.cached_property
    def verification_jobs(self) -> List[VerificationJob]:
        jobs = []
        try:
            verify = _get(self.data, "verify", kind=dict) or {}
            for key, job in verify.items():
                try:
                    name = _get(job, "prowJob", "name")
                    optional = _get(job, "optional", kind=bool) or False
                except ValueError as e:
                    raise ValueError(f"verify.{key}: {e}") from e
                if not name:
                    logger.warning("Verification %s in %s has no prow job name; skipping", key, self.path)
                    continue
                jobs.append(VerificationJob(name=name, optional=optional))
        except ValueError as e:
            raise self._invalid(e) from e
        return jobs


def iter_release_configs(release_config_dir: Path) -> Iterator[ReleaseConfig]:
    """
    Recursively walks release_config_dir and yields every release controller config found.
    Files without a .json extension are ignored. Any read or parse failure raises ReleaseConfigError.
    """
    try:
        entries = sorted(release_config_dir.iterdir())
    except OSError as e:
        raise ReleaseConfigError(f"could not list release controller configs in {release_config_dir}: {e}") from e
    for path in entries:
        if path.is_dir():
            yield from iter_release_configs(path)
        elif path.suffix != ".json":
            logger.debug("Ignoring non-JSON file %s", path)
        else:
            yield ReleaseConfig.from_file(path)
