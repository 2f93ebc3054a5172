import re
import sys
import tempfile
import types
import unittest
from pathlib import Path

# Import server.static_files without executing src/server/__init__.py.
_SERVER_DIR = Path(__file__).resolve().parents[2] / "src" / "server"
if "server" not in sys.modules:
    _pkg = types.ModuleType("server")
    _pkg.__path__ = [str(_SERVER_DIR)]  # type: ignore[attr-defined]
    sys.modules["server"] = _pkg

from server.static_files import guess_content_type, resolve_static_file

_INDEX_HTML = Path(__file__).resolve().parents[2] / "web_ui" / "zenfocus" / "index.html"


class ServerStaticFilesTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.root = Path(self._tmp.name)
        self.ui_root = self.root / "zenfocus"
        self.ui_root.mkdir()

    def test_returns_widget_asset_inside_ui_root(self) -> None:
        chime = self.ui_root / "sounds" / "chime.svg"
        chime.parent.mkdir()
        chime.write_text("<svg/>", encoding="utf-8")

        self.assertEqual(chime.resolve(), resolve_static_file(self.ui_root, "/sounds/chime.svg"))

    def test_rejects_traversal_out_of_ui_root(self) -> None:
        (self.root / "zenfocus.json").write_text("{}", encoding="utf-8")

        self.assertIsNone(resolve_static_file(self.ui_root, "/../zenfocus.json"))

    def test_rejects_hidden_files(self) -> None:
        (self.ui_root / ".env").write_text("SECRET=1", encoding="utf-8")

        self.assertIsNone(resolve_static_file(self.ui_root, "/.env"))

    def test_rejects_root_directories_and_missing_files(self) -> None:
        (self.ui_root / "fonts").mkdir()

        self.assertIsNone(resolve_static_file(self.ui_root, "/"))
        self.assertIsNone(resolve_static_file(self.ui_root, ""))
        self.assertIsNone(resolve_static_file(self.ui_root, "/fonts"))
        self.assertIsNone(resolve_static_file(self.ui_root, "/missing.css"))

    def test_content_type_adds_charset_for_text_like_assets(self) -> None:
        self.assertEqual("text/css; charset=utf-8", guess_content_type(Path("widget.css")))
        self.assertEqual("image/svg+xml; charset=utf-8", guess_content_type(Path("ring.svg")))
        js_type = guess_content_type(Path("widget.js"))
        self.assertIn("javascript", js_type)
        self.assertTrue(js_type.endswith("; charset=utf-8"))

    def test_ambient_track_resolves_with_audio_content_type(self) -> None:
        track = self.ui_root / "sounds" / "rain.mp3"
        track.parent.mkdir()
        track.write_bytes(b"ID3")

        resolved = resolve_static_file(self.ui_root, "/sounds/rain.mp3")

        self.assertEqual(track.resolve(), resolved)
        self.assertEqual("audio/mpeg", guess_content_type(resolved))

    def test_widget_page_offers_ambient_tracks_and_volume(self) -> None:
        html = _INDEX_HTML.read_text(encoding="utf-8")

        self.assertEqual(
            ["rain", "forest", "stream", "white_noise"],
            re.findall(r'class="sound-btn" data-sound="([a-z_]+)"', html),
        )
        self.assertIn('id="volume-slider"', html)
        self.assertIn("audio.loop = true", html)

    def test_content_type_for_binary_and_unknown_files(self) -> None:
        self.assertEqual("image/png", guess_content_type(Path("icon.png")))
        self.assertEqual(
            "application/octet-stream",
            guess_content_type(Path("blob.unknownbinaryextension")),
        )


if __name__ == "__main__":
    unittest.main()
