DEFAULT_CONFIG_FILE = "~/.config/tgconfig.toml"

# The dashboard group in groups.yaml which lists every generated dashboard
DEFAULT_DASHBOARD_GROUP = "redhat"

GROUPS_FILE = "groups.yaml"

# Jobs that are not sharded by version and must never land on a per-version dashboard.
# TODO: confirm with the release owners whether this job still needs excluding
DEFAULT_EXCLUDED_JOBS = (
    "release-openshift-origin-installer-e2e-aws-upgrade",
)

DASHBOARD_NAME_TEMPLATE = "redhat-openshift-{product}-release-{version}-{role}"
GCS_PREFIX_TEMPLATE = "origin-ci-test/logs/{name}"

# Presentation defaults injected into every dashboard tab
TAB_BASE_OPTIONS = "width=10"
OPEN_TEST_URL = "https://prow.svc.ci.openshift.org/view/gcs/<gcs_prefix>/<changelist>"
FILE_BUG_URL = "https://github.com/openshift/origin/issues/new"
OPEN_BUG_URL = "https://github.com/openshift/origin/issues/"
RESULTS_URL = "https://prow.svc.ci.openshift.org/job-history/<gcs_prefix>"
CODE_SEARCH_PATH = "https://github.com/openshift/origin/search"
CODE_SEARCH_URL = "https://github.com/openshift/origin/compare/<start-custom-0>...<end-custom-0>"
