import io
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List

import yaml
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from pytgconfig import constants
from pytgconfig.exceptions import TestGridConfigError

logger = logging.getLogger(__name__)

BLOCKING = "blocking"
INFORMING = "informing"

# round-trip loader so that groups we don't own keep their layout
groups_yaml = YAML(typ="rt")
groups_yaml.preserve_quotes = True
groups_yaml.width = 4096


def dashboard_tab_for(name: str) -> Dict[str, Any]:
    """ Builds a dashboard tab with default values injected """
    return {
        "name": name,
        "test_group_name": name,
        "base_options": constants.TAB_BASE_OPTIONS,
        "open_test_template": {"url": constants.OPEN_TEST_URL},
        "file_bug_template": {
            "url": constants.FILE_BUG_URL,
            "options": [
                {"key": "title", "value": "E2E: <test-name>"},
                {"key": "body", "value": "<test-url>"},
            ],
        },
        "open_bug_template": {"url": constants.OPEN_BUG_URL},
        "results_url_template": {"url": constants.RESULTS_URL},
        "code_search_path": constants.CODE_SEARCH_PATH,
        "code_search_url_template": {"url": constants.CODE_SEARCH_URL},
    }


def test_group_for(name: str) -> Dict[str, Any]:
    return {
        "name": name,
        "gcs_prefix": constants.GCS_PREFIX_TEMPLATE.format(name=name),
    }


class Dashboard:
    """ Release, version and role specific set of jobs """

    def __init__(self, product: str, version: str, role: str):
        self.name = constants.DASHBOARD_NAME_TEMPLATE.format(product=product, version=version, role=role)
        self.tabs: List[Dict[str, Any]] = []
        self.test_groups: List[Dict[str, Any]] = []

    def __repr__(self):
        return f"Dashboard({self.name!r}, jobs={self.job_names!r})"

    @property
    def job_names(self) -> List[str]:
        return [test_group["name"] for test_group in self.test_groups]

    def add(self, name: str):
        if name in self.job_names:
            logger.debug("Job %s is already on dashboard %s", name, self.name)
            return
        self.tabs.append(dashboard_tab_for(name))
        self.test_groups.append(test_group_for(name))

    def __bool__(self):
        return bool(self.test_groups)

    def to_config(self) -> Dict[str, Any]:
        """ Returns a partial TestGrid configuration holding only this dashboard and its test groups """
        return {
            "test_groups": sorted(self.test_groups, key=lambda test_group: test_group["name"]),
            "dashboards": [
                {
                    "name": self.name,
                    "dashboard_tab": sorted(self.tabs, key=lambda tab: tab["name"]),
                },
            ],
        }


def merge_dashboard_group(groups: Dict[str, Any], group_name: str, dashboard_names: Iterable[str]) -> bool:
    """
    Adds dashboard_names to every dashboard group named group_name in a parsed groups.yaml.
    The resulting membership is deduplicated and sorted. Other groups are left alone.
    Returns False if no such group exists; the group is never created.
    """
    names = set(dashboard_names)
    merged = False
    for dashboard_group in groups.get("dashboard_groups") or []:
        if dashboard_group.get("name") != group_name:
            continue
        names.update(dashboard_group.get("dashboard_names") or [])
        dashboard_group["dashboard_names"] = sorted(names)
        merged = True
    return merged


def load_groups(path: Path):
    try:
        with open(path, "r", encoding="utf-8") as f:
            groups = groups_yaml.load(f)
    except OSError as e:
        raise TestGridConfigError(f"could not read TestGrid group config at {path}: {e}") from e
    except (YAMLError, UnicodeDecodeError) as e:
        raise TestGridConfigError(f"could not unmarshal TestGrid group config at {path}: {e}") from e
    if groups is None:
        groups = {}
    if not isinstance(groups, dict):
        raise TestGridConfigError(f"could not unmarshal TestGrid group config at {path}: expected a mapping")
    return groups


def dump_groups(groups) -> str:
    out = io.StringIO()
    groups_yaml.dump(groups, out)
    return out.getvalue()


def dump_dashboard(dashboard: Dashboard) -> str:
    return yaml.safe_dump(dashboard.to_config(), default_flow_style=False)


def write_config(path: Path, content: str):
    try:
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
    except OSError as e:
        raise TestGridConfigError(f"could not write TestGrid config at {path}: {e}") from e
