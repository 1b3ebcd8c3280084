import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import toml

from pytgconfig import constants
from pytgconfig.censor import DynamicCensor


class Runtime:
    def __init__(self, config: Dict[str, Any], dry_run: bool, censor: Optional[DynamicCensor] = None):
        self.config = config
        self.dry_run = dry_run
        self.censor = censor or DynamicCensor()
        self.logger = logging.getLogger("pytgconfig")

    @classmethod
    def from_config_file(cls, config_filename: Path, dry_run: bool, required: bool = True):
        """
        Loads the TOML configuration file. If required is False, a missing file
        results in an empty configuration.
        """
        if not required and not config_filename.exists():
            return Runtime(config={}, dry_run=dry_run)
        with open(config_filename, "r", encoding="utf-8") as config_file:
            config_dict = toml.load(config_file)
        return Runtime(config=config_dict, dry_run=dry_run)

    @property
    def testgrid_config(self) -> Dict[str, Any]:
        return self.config.get("testgrid", {})

    @property
    def dashboard_group(self) -> str:
        return self.testgrid_config.get("group", constants.DEFAULT_DASHBOARD_GROUP)

    @property
    def excluded_jobs(self) -> List[str]:
        return list(self.testgrid_config.get("excluded_jobs", constants.DEFAULT_EXCLUDED_JOBS))
