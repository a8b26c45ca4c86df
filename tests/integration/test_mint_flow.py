import base64
import json
from collections.abc import Callable
from pathlib import Path
from typing import Any
from unittest.mock import patch

import httpx
import pytest
from solders.hash import Hash
from solders.keypair import Keypair
from solders.transaction import Transaction

from mintkit.chain.core_program import CREATE_V1_LAYOUT
from mintkit.chain.mint_submitter import MintSubmitter
from mintkit.chain.rpc_client import SolanaRpcClient
from mintkit.config.settings import Settings
from mintkit.identity.loader import load_identity
from mintkit.pipeline.models import MintRequest
from mintkit.pipeline.pipeline import PipelineContext, PipelineState
from mintkit.pipeline.processor import build_mint_pipeline
from mintkit.scripts import mint_audio, mint_image, mint_mixed
from mintkit.storage.example_adapter import ExampleStorageAdapter
from mintkit.storage.file_uploader import local_file


class FakeSolanaNode:
    """Answers the JSON-RPC calls the mint flow makes and records sent transactions."""

    def __init__(self, confirmation: str = "confirmed", lamports: int = 1_000_000_000) -> None:
        self.blockhash = str(Hash.new_unique())
        self.lamports = lamports
        self.confirmation = confirmation
        self.sent: list[Transaction] = []
        self.methods: list[str] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        payload = json.loads(request.content)
        method = payload["method"]
        self.methods.append(method)
        result: Any
        if method == "getLatestBlockhash":
            result = {
                "context": {"slot": 1},
                "value": {"blockhash": self.blockhash, "lastValidBlockHeight": 1000},
            }
        elif method == "sendTransaction":
            tx = Transaction.from_bytes(base64.b64decode(payload["params"][0]))
            self.sent.append(tx)
            result = str(tx.signatures[0])
        elif method == "getSignatureStatuses":
            result = {
                "context": {"slot": 2},
                "value": [
                    {"slot": 2, "confirmations": 1, "err": None, "confirmationStatus": self.confirmation}
                ],
            }
        elif method == "getBlockHeight":
            result = 10
        elif method == "getBalance":
            result = {"context": {"slot": 2}, "value": self.lamports}
        else:
            return httpx.Response(
                200,
                json={"jsonrpc": "2.0", "id": payload["id"], "error": {"code": -32601, "message": method}},
            )
        return httpx.Response(200, json={"jsonrpc": "2.0", "id": payload["id"], "result": result})

    def client(self) -> SolanaRpcClient:
        return SolanaRpcClient(
            rpc_url="https://rpc.test",
            timeout_seconds=5,
            transport=httpx.MockTransport(self.handler),
        )


def _make_submitter(rpc: SolanaRpcClient) -> MintSubmitter:
    return MintSubmitter(
        rpc,
        commitment="confirmed",
        blockhash_max_age_seconds=60,
        confirmation_timeout_seconds=5,
        poll_interval_seconds=0,
        sleep=lambda _seconds: None,
    )


class TestMintFlow:
    def test_image_nft_end_to_end(
        self,
        keypair_file: tuple[Path, Keypair],
        make_file: Callable[[str, bytes], Path],
    ) -> None:
        key_path, keypair = keypair_file
        identity = load_identity(key_path)
        storage = ExampleStorageAdapter()
        node = FakeSolanaNode()
        image = make_file("images/test.jpg", b"0123456789")
        request = MintRequest(name="Test NFT", files=[local_file(image)])

        with node.client() as rpc:
            context = build_mint_pipeline(identity, storage, _make_submitter(rpc)).run(
                PipelineContext(request=request)
            )

        assert context.state is PipelineState.DONE
        assert len(storage.uploads) == 2
        name, mime_type, content = storage.uploads[context.metadata_uri]
        assert (name, mime_type) == ("metadata.json", "application/json")
        metadata = json.loads(content)
        image_uri = next(uri for uri, (n, _m, _c) in storage.uploads.items() if n == "test.jpg")
        assert metadata["image"] == image_uri
        assert metadata["properties"]["files"] == [{"uri": image_uri, "type": "image/jpeg"}]
        assert metadata["properties"]["creators"][0]["address"] == str(keypair.pubkey())

        assert len(node.sent) == 1
        tx = node.sent[0]
        tx.verify()
        instruction = tx.message.instructions[0]
        assert CREATE_V1_LAYOUT.parse(bytes(instruction.data)).uri == context.metadata_uri
        assert context.mint_result is not None
        assert context.mint_result.transaction_signature == str(tx.signatures[0])
        assert node.methods[:3] == ["getBalance", "getLatestBlockhash", "sendTransaction"]
        assert tx.message.recent_blockhash == Hash.from_string(node.blockhash)

    def test_mixed_media_metadata_end_to_end(
        self,
        keypair_file: tuple[Path, Keypair],
        tmp_path: Path,
        make_file: Callable[[str, bytes], Path],
    ) -> None:
        identity = load_identity(keypair_file[0])
        storage = ExampleStorageAdapter()
        node = FakeSolanaNode()
        make_file(f"assets/{mint_mixed.COVER_PATH}", b"jpeg")
        make_file(f"assets/{mint_mixed.HTML_PATH}", b"<html></html>")
        make_file(f"assets/{mint_mixed.AUDIO_PATH}", b"mp3")
        request = mint_mixed.build_request(Settings(assets_root=str(tmp_path / "assets")))

        with node.client() as rpc:
            context = build_mint_pipeline(identity, storage, _make_submitter(rpc)).run(
                PipelineContext(request=request)
            )

        metadata = json.loads(storage.uploads[context.metadata_uri][2])
        cover, html, audio = (asset.uri for asset in context.assets)
        assert metadata["image"] == cover
        assert metadata["animation_url"] == audio
        assert metadata["external_url"] == html
        assert metadata["media"] == {
            "cover_image": cover,
            "audio_track": audio,
            "interactive_content": html,
            "total_components": 3,
        }
        assert [f["cdn"] for f in metadata["properties"]["files"]] == [False, False, False]
        assert [f["category"] for f in metadata["properties"]["files"]] == [
            "cover",
            "interactive",
            "audio",
        ]
        assert metadata["technical"]["blockchain"] == "Solana"

    def test_rerun_uploads_same_content_to_same_uri(
        self,
        keypair_file: tuple[Path, Keypair],
        make_file: Callable[[str, bytes], Path],
    ) -> None:
        identity = load_identity(keypair_file[0])
        storage = ExampleStorageAdapter()
        node = FakeSolanaNode()
        request = MintRequest(name="Again", files=[local_file(make_file("a.png", b"png"))])

        with node.client() as rpc:
            pipeline = build_mint_pipeline(identity, storage, _make_submitter(rpc))
            first = pipeline.run(PipelineContext(request=request))
            second = pipeline.run(PipelineContext(request=request))

        assert first.metadata_uri == second.metadata_uri
        assert len(node.sent) == 2
        assert first.mint_result != second.mint_result


def _script_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path, key_path: Path) -> None:
    monkeypatch.setenv("STORAGE_PROVIDER", "example")
    monkeypatch.setenv("KEYPAIR_PATH", str(key_path))
    monkeypatch.setenv("ASSETS_ROOT", str(tmp_path / "assets"))
    monkeypatch.setenv("CONFIRMATION_POLL_INTERVAL_SECONDS", "0")


class TestMintScripts:
    def test_mint_image_script_succeeds(
        self,
        monkeypatch: pytest.MonkeyPatch,
        tmp_path: Path,
        keypair_file: tuple[Path, Keypair],
        make_file: Callable[[str, bytes], Path],
    ) -> None:
        _script_env(monkeypatch, tmp_path, keypair_file[0])
        make_file(f"assets/{mint_image.IMAGE_PATH}", b"jpegbytes")
        node = FakeSolanaNode()

        with patch("mintkit.scripts.runner.build_rpc_client", return_value=node.client()):
            exit_code = mint_image.main()

        assert exit_code == 0
        assert len(node.sent) == 1

    def test_mint_audio_script_missing_cover_fails_before_network(
        self,
        monkeypatch: pytest.MonkeyPatch,
        tmp_path: Path,
        keypair_file: tuple[Path, Keypair],
        make_file: Callable[[str, bytes], Path],
    ) -> None:
        _script_env(monkeypatch, tmp_path, keypair_file[0])
        make_file(f"assets/{mint_audio.AUDIO_PATH}", b"mp3")
        node = FakeSolanaNode()

        with patch("mintkit.scripts.runner.build_rpc_client", return_value=node.client()):
            exit_code = mint_audio.main()

        assert exit_code == 1
        assert node.methods == []

    def test_mint_mixed_request_shape(self, tmp_path: Path) -> None:
        settings = Settings(assets_root=str(tmp_path))

        request = mint_mixed.build_request(settings)

        assert [f.role for f in request.files] == ["image", "html", "audio"]
        assert [f.mime_type for f in request.files] == ["image/jpeg", "text/html", "audio/mpeg"]
        assert request.files[0].path == tmp_path / mint_mixed.COVER_PATH
        assert request.category == "mixed"
        assert request.animation_role == "audio"
        assert request.external_role == "html"
        assert request.cdn is False
        assert request.media_roles == {
            "cover_image": "image",
            "audio_track": "audio",
            "interactive_content": "html",
        }
        assert request.extra["technical"] == {
            "standard": "Metaplex Core",
            "storage": "IPFS via Pinata",
            "blockchain": "Solana",
        }

    def test_mint_audio_request_shape(self, tmp_path: Path) -> None:
        settings = Settings(assets_root=str(tmp_path))

        request = mint_audio.build_request(settings)

        assert [f.role for f in request.files] == ["audio", "image"]
        assert request.category == "audio"
        assert request.animation_role == request.external_role == "audio"
        assert request.cdn is False
        assert request.extra == {
            "audio": {
                "artist": "Digital Musician",
                "album": "Blockchain Beats",
                "genre": "Electronic",
                "duration": "3:45",
                "year": "2025",
            }
        }
        assert ("Artist", "Digital Musician") in request.attributes

    def test_missing_keypair_fails(
        self,
        monkeypatch: pytest.MonkeyPatch,
        tmp_path: Path,
        make_file: Callable[[str, bytes], Path],
    ) -> None:
        _script_env(monkeypatch, tmp_path, tmp_path / "absent.json")
        make_file(f"assets/{mint_image.IMAGE_PATH}", b"jpegbytes")

        assert mint_image.main() == 1
