import shutil
import unittest
import uuid
from pathlib import Path

from PIL import Image

from app.portfolio.utils.imaging import probe_image_size, scan_image_items


class TestImaging(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp_path = Path(".tmp-tests-imaging-" + str(uuid.uuid4())[:8])
        self.tmp_path.mkdir(exist_ok=True, parents=True)

    def tearDown(self) -> None:
        shutil.rmtree(self.tmp_path, ignore_errors=True)

    def _image(self, name: str, size: tuple[int, int]) -> Path:
        path = self.tmp_path / name
        Image.new("RGB", size, (200, 120, 40)).save(path)
        return path

    def test_probe_image_size(self):
        path = self._image("wide.png", (40, 20))
        self.assertEqual(probe_image_size(path), (40, 20))

    def test_probe_unreadable_file(self):
        bogus = self.tmp_path / "broken.jpg"
        bogus.write_text("not an image")
        with self.assertLogs("app.portfolio.utils.imaging", level="WARNING"):
            self.assertIsNone(probe_image_size(bogus))

    def test_scan_image_items(self):
        self._image("b.png", (30, 30))
        self._image("A.png", (60, 30))
        (self.tmp_path / "notes.txt").write_text("skip me")
        (self.tmp_path / "c.jpg").write_text("corrupt")

        with self.assertLogs("app.portfolio.utils.imaging", level="WARNING"):
            items = scan_image_items(self.tmp_path)

        self.assertEqual([Path(it.key).name for it in items], ["A.png", "b.png", "c.jpg"])
        self.assertEqual([it.aspect_ratio for it in items], [2.0, 1.0, 1.0])
        self.assertEqual(items[0].payload, self.tmp_path / "A.png")


if __name__ == "__main__":
    unittest.main()
