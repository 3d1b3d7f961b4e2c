import unittest
from dataclasses import FrozenInstanceError, replace

from tests._test_path import SRC  # noqa: F401  (ensures src on path)

from photofusion.core.models import (
    MAX_IMAGE_BYTES,
    EditRequest,
    EncodedPayload,
    Failed,
    ImageCandidate,
    Succeeded,
)
from photofusion.remote.config import DEFAULT_MODEL, ServiceConfig


class TestModels(unittest.TestCase):
    def test_max_image_bytes_is_4_mib(self):
        self.assertEqual(MAX_IMAGE_BYTES, 4 * 1024 * 1024)

    def test_edit_request_frozen(self):
        p = EncodedPayload(content_base64="AAAA", media_type="image/png")
        req = EditRequest(base=p, logo=p, instruction="x")
        with self.assertRaises(FrozenInstanceError):
            req.instruction = "y"  # type: ignore[misc]

    def test_workflow_variants_compare_by_value(self):
        self.assertEqual(Succeeded("data:a"), Succeeded("data:a"))
        self.assertNotEqual(Failed("boom"), Failed("other"))

    def test_candidate_name(self):
        c = ImageCandidate(path="/tmp/photos/me.png", size=1, media_type="image/png")
        self.assertEqual(c.name, "me.png")


class TestServiceConfig(unittest.TestCase):
    def test_defaults(self):
        c = ServiceConfig(api_key="k")
        self.assertEqual(c.model, DEFAULT_MODEL)

    def test_replace(self):
        c = ServiceConfig(api_key="k")
        c2 = replace(c, model="other-model")
        self.assertEqual(c2.model, "other-model")
        # original unchanged
        self.assertEqual(c.model, DEFAULT_MODEL)
