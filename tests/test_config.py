import unittest

from tests._test_path import SRC  # noqa: F401

from photofusion.core.errors import MissingCredentialError
from photofusion.remote.config import DEFAULT_MODEL, load_service_config


class TestLoadServiceConfig(unittest.TestCase):
    def test_api_key_from_env(self):
        c = load_service_config({"API_KEY": "abc"})
        self.assertEqual(c.api_key, "abc")
        self.assertEqual(c.model, DEFAULT_MODEL)

    def test_gemini_key_fallback_and_model_override(self):
        c = load_service_config({"GEMINI_API_KEY": " xyz ", "PHOTOFUSION_MODEL": "custom-model"})
        self.assertEqual(c.api_key, "xyz")
        self.assertEqual(c.model, "custom-model")

    def test_api_key_wins_over_fallback(self):
        c = load_service_config({"API_KEY": "first", "GEMINI_API_KEY": "second"})
        self.assertEqual(c.api_key, "first")

    def test_missing_key_is_fatal(self):
        with self.assertRaises(MissingCredentialError):
            load_service_config({})
        with self.assertRaises(MissingCredentialError):
            load_service_config({"API_KEY": "   "})
