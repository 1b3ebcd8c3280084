from pathlib import Path
from typing import Iterable, List, Optional

import click

from pytgconfig import constants, testgrid
from pytgconfig.cli import cli, pass_runtime
from pytgconfig.exceptions import TestGridGeneratorError
from pytgconfig.release import ReleaseConfig, iter_release_configs
from pytgconfig.runtime import Runtime
from pytgconfig.testgrid import Dashboard


class TestGridConfigPipeline:
    """
    Maintains TestGrid dashboards for release-gating and release-informing jobs.

    Reads the release controller configuration for all release candidates being
    tested and generates TestGrid configuration for the jobs involved, partitioned
    by product (OKD or OCP), version, and whether they are blocking or informing.
    """

    def __init__(self, runtime: Runtime, release_config_dir: Path, testgrid_config_dir: Path,
                 excluded_jobs: Optional[Iterable[str]] = None, group: Optional[str] = None):
        self.runtime = runtime
        self.release_config_dir = release_config_dir
        self.testgrid_config_dir = testgrid_config_dir
        self.excluded_jobs = set(runtime.excluded_jobs if excluded_jobs is None else excluded_jobs)
        self.group = group or runtime.dashboard_group
        self._logger = runtime.logger

    def run(self):
        dashboards = self.collect_dashboards()
        # first, update the overall list of dashboards that exist for the group
        self.update_groups(dashboard.name for dashboard in dashboards)
        # then, rewrite any dashboard configs we are generating
        for dashboard in dashboards:
            self._write(self.testgrid_config_dir / f"{dashboard.name}.yaml", testgrid.dump_dashboard(dashboard))
        self._logger.info("Finished generating TestGrid dashboards.")

    def collect_dashboards(self) -> List[Dashboard]:
        dashboards = []
        for release_config in iter_release_configs(self.release_config_dir):
            dashboards.extend(self.dashboards_for(release_config))
        return dashboards

    def dashboards_for(self, release_config: ReleaseConfig) -> List[Dashboard]:
        """ Returns the non-empty blocking and informing dashboards for a release controller config """
        target = release_config.publish_target
        if not target:
            self._logger.info("could not determine publish destination for config at %s", release_config.path)
            return []

        blocking = Dashboard(target.product, target.version, testgrid.BLOCKING)
        informing = Dashboard(target.product, target.version, testgrid.INFORMING)
        for job in release_config.verification_jobs:
            if job.name in self.excluded_jobs:
                self._logger.info("Job %s is not sharded by version; skipping", job.name)
                continue
            if job.optional:
                informing.add(job.name)
            else:
                blocking.add(job.name)
        return [dashboard for dashboard in (blocking, informing) if dashboard]

    def update_groups(self, dashboard_names: Iterable[str]):
        groups_file = self.testgrid_config_dir / constants.GROUPS_FILE
        groups = testgrid.load_groups(groups_file)
        if not testgrid.merge_dashboard_group(groups, self.group, dashboard_names):
            self._logger.warning("Dashboard group %s not found in %s; its membership is not updated",
                                 self.group, groups_file)
        self._write(groups_file, testgrid.dump_groups(groups))

    def _write(self, path: Path, content: str):
        if self.runtime.dry_run:
            self._logger.warning("[DRY RUN] Would have written %s:\n%s", path, content)
            return
        self._logger.info("Writing %s", path)
        testgrid.write_config(path, content)


@cli.command("testgrid-config")
@click.option("--release-config", "release_config_dir", metavar="PATH", required=True,
              type=click.Path(exists=True, file_okay=False, path_type=Path),
              help="Path to Release Controller configuration directory.")
@click.option("--testgrid-config", "testgrid_config_dir", metavar="PATH", required=True,
              type=click.Path(exists=True, file_okay=False, path_type=Path),
              help="Path to TestGrid configuration directory.")
@pass_runtime
def testgrid_config(runtime: Runtime, release_config_dir: Path, testgrid_config_dir: Path):
    pipeline = TestGridConfigPipeline(runtime, release_config_dir, testgrid_config_dir)
    try:
        pipeline.run()
    except TestGridGeneratorError as e:
        raise click.ClickException(str(e))
