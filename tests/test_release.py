import json
import tempfile
from pathlib import Path
from unittest import TestCase

from pytgconfig import exceptions
from pytgconfig.release import PublishMode, PublishTarget, ReleaseConfig, VerificationJob, iter_release_configs


class TestReleaseConfig(TestCase):
    def test_publish_target_mirror(self):
        release_config = ReleaseConfig({
            "publish": {
                "mirror-to-origin": {"imageStreamRef": {"name": "4.6"}},
            },
        })
        target = release_config.publish_target
        self.assertEqual(target, PublishTarget(PublishMode.MIRRORED_IMAGE_STREAM, "4.6"))
        self.assertEqual(target.product, "okd")

    def test_publish_target_tag(self):
        release_config = ReleaseConfig({
            "publish": {
                "tag": {"tagRef": {"name": "4.5"}},
            },
        })
        target = release_config.publish_target
        self.assertEqual(target.mode, PublishMode.TAGGED_RELEASE)
        self.assertEqual(target.product, "ocp")
        self.assertEqual(target.version, "4.5")

    def test_publish_target_prefers_mirror(self):
        release_config = ReleaseConfig({
            "publish": {
                "tag": {"tagRef": {"name": "4.5"}},
                "mirror-to-origin": {"imageStreamRef": {"name": "origin-4.5"}},
            },
        })
        self.assertEqual(release_config.publish_target, PublishTarget(PublishMode.MIRRORED_IMAGE_STREAM, "origin-4.5"))

    def test_publish_target_unknown(self):
        self.assertIsNone(ReleaseConfig({}).publish_target)
        self.assertIsNone(ReleaseConfig({"publish": {"mirror-to-origin": {"imageStreamRef": {"name": ""}}}}).publish_target)
        self.assertIsNone(ReleaseConfig({"publish": {"tag": None}}).publish_target)

    def test_publish_target_wrong_shape(self):
        with self.assertRaises(exceptions.ReleaseConfigError) as cm:
            ReleaseConfig({"publish": {"tag": "oops"}}).publish_target
        self.assertIn("publish.tag must be an object", str(cm.exception))
        with self.assertRaises(exceptions.ReleaseConfigError):
            ReleaseConfig({"publish": {"mirror-to-origin": {"imageStreamRef": {"name": 4.6}}}}).publish_target

    def test_verification_jobs(self):
        release_config = ReleaseConfig({
            "verify": {
                "aws": {"prowJob": {"name": "release-openshift-ocp-installer-e2e-aws-4.5"}},
                "gcp": {"optional": True, "prowJob": {"name": "release-openshift-ocp-installer-e2e-gcp-4.5"}},
                "broken": {"optional": True},
            },
        })
        self.assertEqual(release_config.verification_jobs, [
            VerificationJob("release-openshift-ocp-installer-e2e-aws-4.5", False),
            VerificationJob("release-openshift-ocp-installer-e2e-gcp-4.5", True),
        ])

    def test_verification_jobs_none(self):
        self.assertEqual(ReleaseConfig({"verify": None}).verification_jobs, [])
        self.assertEqual(ReleaseConfig({}).verification_jobs, [])

    def test_verification_jobs_optional_must_be_bool(self):
        release_config = ReleaseConfig({"verify": {"a": {"optional": "false", "prowJob": {"name": "a"}}}})
        with self.assertRaises(exceptions.ReleaseConfigError) as cm:
            release_config.verification_jobs
        self.assertIn("verify.a: optional must be of type bool", str(cm.exception))

    def test_verification_jobs_name_must_be_string(self):
        release_config = ReleaseConfig({"verify": {"a": {"prowJob": {"name": 42}}}})
        with self.assertRaises(exceptions.ReleaseConfigError):
            release_config.verification_jobs

    def test_verification_jobs_null_optional(self):
        release_config = ReleaseConfig({"verify": {"a": {"optional": None, "prowJob": {"name": "a"}}}})
        self.assertEqual(release_config.verification_jobs, [VerificationJob("a", False)])


class TestIterReleaseConfigs(TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.root = Path(self._tmp.name)

    def test_walks_recursively(self):
        (self.root / "nested" / "deeper").mkdir(parents=True)
        (self.root / "a.json").write_text(json.dumps({"publish": {"tag": {"tagRef": {"name": "4.5"}}}}))
        (self.root / "nested" / "deeper" / "b.json").write_text(json.dumps({"verify": {}}))
        (self.root / "README.md").write_text("not a config")
        (self.root / "nested" / "c.yaml").write_text("not: json")

        actual = [release_config.path for release_config in iter_release_configs(self.root)]
        self.assertEqual(actual, [self.root / "a.json", self.root / "nested" / "deeper" / "b.json"])

    def test_invalid_json_is_fatal(self):
        (self.root / "bad.json").write_text("{not json")
        with self.assertRaises(exceptions.ReleaseConfigError) as cm:
            list(iter_release_configs(self.root))
        self.assertIn(str(self.root / "bad.json"), str(cm.exception))
        self.assertIn("could not unmarshal", str(cm.exception))

    def test_non_object_is_fatal(self):
        (self.root / "list.json").write_text("[]")
        with self.assertRaises(exceptions.ReleaseConfigError):
            list(iter_release_configs(self.root))

    def test_verify_not_an_object_is_fatal(self):
        (self.root / "list.json").write_text(json.dumps({"verify": ["x"]}))
        with self.assertRaises(exceptions.ReleaseConfigError) as cm:
            list(iter_release_configs(self.root))
        self.assertIn(str(self.root / "list.json"), str(cm.exception))
        self.assertIn("verify must be of type dict", str(cm.exception))

    def test_invalid_utf8_is_fatal(self):
        (self.root / "a.json").write_bytes(b'{"name": "\xff"}')
        with self.assertRaises(exceptions.ReleaseConfigError) as cm:
            list(iter_release_configs(self.root))
        self.assertIn("could not unmarshal", str(cm.exception))

    def test_missing_file_is_fatal(self):
        with self.assertRaises(exceptions.ReleaseConfigError) as cm:
            ReleaseConfig.from_file(self.root / "missing.json")
        self.assertIn("could not read", str(cm.exception))
