import base64
import unittest
from types import SimpleNamespace

from tests._test_path import SRC  # noqa: F401
from tests.fakes import fake_genai, inline_part, response_with, text_part

from google.genai import types

from photofusion.core.errors import NoImageReturnedError, RemoteServiceError
from photofusion.core.models import EditRequest, EncodedPayload
from photofusion.remote.edit_client import NO_IMAGE_MESSAGE, EditRequestClient, build_contents


def _payload(data: bytes, media_type: str) -> EncodedPayload:
    return EncodedPayload(content_base64=base64.b64encode(data).decode("ascii"), media_type=media_type)


class TestEditRequestClient(unittest.TestCase):
    def setUp(self):
        self.request = EditRequest(
            base=_payload(b"base-bytes", "image/png"),
            logo=_payload(b"logo-bytes", "image/jpeg"),
            instruction="put the logo on the shirt",
        )

    def test_build_contents_order(self):
        contents = build_contents(self.request)
        parts = contents.parts
        self.assertEqual(len(parts), 3)
        self.assertEqual(parts[0].inline_data.data, b"base-bytes")
        self.assertEqual(parts[0].inline_data.mime_type, "image/png")
        self.assertEqual(parts[1].inline_data.data, b"logo-bytes")
        self.assertEqual(parts[1].inline_data.mime_type, "image/jpeg")
        self.assertIsNone(parts[2].inline_data)
        self.assertEqual(parts[2].text, "put the logo on the shirt")

    def test_returns_first_inline_image(self):
        sdk = fake_genai(response_with(
            text_part("Here you go"),
            inline_part(b"\x01\x02\x03", "image/webp"),
            inline_part(b"second", "image/png"),
        ))
        client = EditRequestClient(model="m", client=sdk)

        uri = client.submit(self.request)

        self.assertEqual(uri, "data:image/webp;base64," + base64.b64encode(b"\x01\x02\x03").decode("ascii"))

    def test_single_call_declares_image_only_response(self):
        sdk = fake_genai(response_with(inline_part(b"x", "image/png")))
        EditRequestClient(model="my-model", client=sdk).submit(self.request)

        self.assertEqual(len(sdk.models.calls), 1)
        call = sdk.models.calls[0]
        self.assertEqual(call["model"], "my-model")
        self.assertIsInstance(call["config"], types.GenerateContentConfig)
        self.assertEqual(
            [str(getattr(m, "value", m)) for m in call["config"].response_modalities],
            ["IMAGE"],
        )

    def test_no_image_part(self):
        sdk = fake_genai(response_with(text_part("I cannot do that")))
        with self.assertRaises(NoImageReturnedError) as ctx:
            EditRequestClient(client=sdk).submit(self.request)
        self.assertEqual(str(ctx.exception), NO_IMAGE_MESSAGE)

    def test_no_candidates_means_no_image(self):
        sdk = fake_genai(response_with())
        sdk.models.response.candidates = []
        with self.assertRaises(NoImageReturnedError):
            EditRequestClient(client=sdk).submit(self.request)

    def test_remote_failure_wrapped_once(self):
        sdk = fake_genai(error=RuntimeError("429 RESOURCE_EXHAUSTED"))
        with self.assertRaises(RemoteServiceError) as ctx:
            EditRequestClient(client=sdk).submit(self.request)
        self.assertIn("RESOURCE_EXHAUSTED", str(ctx.exception))
        self.assertEqual(len(sdk.models.calls), 1)

    def test_missing_mime_type_defaults_to_png(self):
        sdk = fake_genai(response_with(inline_part(b"x", None)))
        uri = EditRequestClient(client=sdk).submit(self.request)
        self.assertTrue(uri.startswith("data:image/png;base64,"))

    def test_unreadable_parts_raise_remote_service_error(self):
        response = SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=5))])
        with self.assertRaises(RemoteServiceError) as ctx:
            EditRequestClient(model="m", client=fake_genai(response)).submit(self.request)
        self.assertIn("Malformed response from m", str(ctx.exception))

    def test_inline_data_without_bytes_is_skipped(self):
        sdk = fake_genai(response_with(
            SimpleNamespace(text=None, inline_data=SimpleNamespace(mime_type="image/png")),
            inline_part(b"real", "image/jpeg"),
        ))
        uri = EditRequestClient(client=sdk).submit(self.request)
        self.assertEqual(uri, "data:image/jpeg;base64," + base64.b64encode(b"real").decode("ascii"))

    def test_only_empty_inline_data_means_no_image(self):
        sdk = fake_genai(response_with(SimpleNamespace(text=None, inline_data=SimpleNamespace())))
        with self.assertRaises(NoImageReturnedError):
            EditRequestClient(client=sdk).submit(self.request)
