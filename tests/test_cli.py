"""
Tests for the Mood NFT command-line tools.
"""

import base64
import json

from typer.testing import CliRunner

from mood_nft.cli import app
from mood_nft.encoder import TOKEN_URI_PREFIX, serialize_metadata

runner = CliRunner()


class TestDecode:
    """Tests for the offline decode command."""

    def test_decode_prints_metadata(self):
        payload = base64.b64encode(
            serialize_metadata("MoodNFT", "ipfs://happy").encode("utf-8")
        ).decode("ascii")

        result = runner.invoke(app, ["decode", TOKEN_URI_PREFIX + payload])

        assert result.exit_code == 0
        metadata = json.loads(result.stdout)
        assert metadata["name"] == "MoodNFT"
        assert metadata["image"] == "ipfs://happy"

    def test_decode_rejects_foreign_uri(self):
        result = runner.invoke(app, ["decode", "https://example.com/1.json"])

        assert result.exit_code == 1
        assert "Error:" in result.stdout


class TestRemoteCommands:
    """Tests for commands that talk to a running service."""

    def test_mint_uri_and_metadata(self, live_server):
        result = runner.invoke(app, ["mint", "alice", "--url", live_server])
        assert result.exit_code == 0
        assert "Minted token 0 for alice" in result.stdout

        result = runner.invoke(app, ["uri", "0", "--url", live_server])
        assert result.exit_code == 0
        assert result.stdout.strip().startswith(TOKEN_URI_PREFIX)

        result = runner.invoke(app, ["metadata", "0", "--url", live_server])
        assert result.exit_code == 0
        assert result.stdout.strip() == "MoodNFT [moodiness=100] ipfs://happy"

        result = runner.invoke(app, ["metadata", "0", "--url", live_server, "--json"])
        assert result.exit_code == 0
        assert json.loads(result.stdout)["description"] == (
            "An NFT that reflects the owners mood."
        )

    def test_unknown_token(self, live_server):
        result = runner.invoke(app, ["uri", "5", "--url", live_server])

        assert result.exit_code == 1
        assert "Error: HTTP 404" in result.stdout
