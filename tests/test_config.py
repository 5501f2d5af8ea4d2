"""Tests for settings and token discovery."""

from __future__ import annotations

import unittest

from syncgit.config import Settings, TokenSource, load_settings
from syncgit.exceptions import ConfigError


class LoadSettingsTests(unittest.TestCase):
    def test_defaults(self) -> None:
        self.assertEqual(load_settings({}), Settings())

    def test_overrides(self) -> None:
        settings = load_settings(
            {
                "SYNCGIT_REMOTE": "upstream",
                "SYNCGIT_API_URL": "https://ghe.example.com/api/v3/",
                "SYNCGIT_PROBE_ADDRESS": "1.1.1.1:443",
                "SYNCGIT_PROBE_TIMEOUT": "1.5",
                "SYNCGIT_PULL_REBASE": "yes",
            }
        )
        self.assertEqual(settings.remote, "upstream")
        self.assertEqual(settings.api_url, "https://ghe.example.com/api/v3")
        self.assertEqual((settings.probe_host, settings.probe_port), ("1.1.1.1", 443))
        self.assertEqual(settings.probe_timeout, 1.5)
        self.assertTrue(settings.pull_rebase)

    def test_invalid_values_raise(self) -> None:
        for env in (
            {"SYNCGIT_PROBE_ADDRESS": "nohost"},
            {"SYNCGIT_PROBE_ADDRESS": "host:port"},
            {"SYNCGIT_PROBE_TIMEOUT": "-1"},
            {"SYNCGIT_PULL_REBASE": "maybe"},
        ):
            with self.subTest(env=env), self.assertRaises(ConfigError):
                load_settings(env)


class TokenSourceTests(unittest.TestCase):
    def test_first_non_empty_variable_wins(self) -> None:
        source = TokenSource({"GITHUB_TOKEN": "  ", "GH_TOKEN": "second", "GIT_TOKEN": "third"})
        self.assertEqual(source.resolve(), "second")

    def test_missing_token_is_none(self) -> None:
        self.assertIsNone(TokenSource({}).resolve())

    def test_environment_is_read_once(self) -> None:
        env = {"GIT_TOKEN": "first"}
        source = TokenSource(env)
        self.assertEqual(source.resolve(), "first")
        env["GIT_TOKEN"] = "changed"
        self.assertEqual(source.resolve(), "first")

    def test_repr_does_not_leak_token(self) -> None:
        source = TokenSource({"GITHUB_TOKEN": "s3cret"})
        source.resolve()
        self.assertNotIn("s3cret", repr(source))


if __name__ == "__main__":
    unittest.main()
