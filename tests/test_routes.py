import io
import shutil
import tempfile
import unittest
from pathlib import Path

from fastapi.testclient import TestClient
from PIL import Image

from gif_fixtures import BLUE, RED, make_app, write_gif, write_templates


class TestRoutes(unittest.TestCase):
    def setUp(self):
        self.tmp = Path(tempfile.mkdtemp())
        self.src = self.tmp / "gifs"
        self.src.mkdir()
        self.templates = write_templates(self.tmp / "templates")

        write_gif(self.src / "red-cat.gif", colors=(RED, BLUE))
        (self.src / "a-cat.gif").write_bytes(b"x" * 3000)
        (self.src / "b-cat_dog.gif").write_bytes(b"x" * 10)
        (self.src / "c-dog.gif").write_bytes(b"x" * 10)
        (self.src / "broken-bytes.gif").write_bytes(b"this is not a gif")
        Image.new("RGB", (4, 4), RED).save(self.src / "sneaky-png.gif", format="PNG")

        self.client = TestClient(make_app(self.src, self.templates))

    def tearDown(self):
        shutil.rmtree(self.tmp)

    def entries(self, body: str) -> list[str]:
        return body.split("\n")[1:]

    # search

    def test_empty_query_renders_search_page(self):
        for url in ["/search", "/search?q=", "/search?q=%20,%20,"]:
            with self.subTest(url=url):
                resp = self.client.get(url)
                self.assertEqual(resp.status_code, 200)
                self.assertEqual(resp.text, "total=6")

    def test_results_are_deduplicated(self):
        resp = self.client.get("/search", params={"q": "cat,dog"})
        self.assertEqual(resp.status_code, 200)
        header, *entries = resp.text.split("\n")
        self.assertEqual(header, "total=6 words=cat,dog count=4")
        names = [e.split("|")[1] for e in entries]
        self.assertEqual(len(names), 4)
        self.assertEqual(
            set(names), {"red-cat.gif", "a-cat.gif", "b-cat_dog.gif", "c-dog.gif"}
        )
        self.assertEqual([e.split("|")[0] for e in entries], ["1", "2", "3", "4"])

    def test_query_is_trimmed_and_lowercased(self):
        resp = self.client.get("/search", params={"q": " DOG , "})
        self.assertIn("count=2", resp.text)

    def test_entry_size_in_kb(self):
        resp = self.client.get("/search", params={"q": "a"})
        self.assertEqual(self.entries(resp.text), ["1|a-cat.gif|2 KB"])

    def test_no_matches(self):
        resp = self.client.get("/search", params={"q": "bird"})
        self.assertEqual(resp.text, "total=6 words=bird count=0\n")

    def test_query_is_escaped(self):
        resp = self.client.get("/search", params={"q": "<script>"})
        self.assertIn("words=&lt;script&gt;", resp.text)

    def test_repeated_search_is_stable(self):
        first = self.client.get("/search", params={"q": "cat"}).text
        second = self.client.get("/search", params={"q": "cat"}).text
        self.assertEqual(first, second)

    def test_prefix_match(self):
        client = TestClient(make_app(self.src, self.templates, prefix_match=True))
        resp = client.get("/search", params={"q": "do"})
        self.assertIn("count=2", resp.text)

    def test_search_rejects_other_methods(self):
        resp = self.client.post("/search")
        self.assertEqual(resp.status_code, 405)
        self.assertEqual(resp.content, b"")

    def test_root_redirects(self):
        resp = self.client.get("/", follow_redirects=False)
        self.assertIn(resp.status_code, (302, 307))
        self.assertEqual(resp.headers["location"], "/search")

    # files

    def test_file_bytes_are_exact(self):
        resp = self.client.get("/files/red-cat.gif")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.content, (self.src / "red-cat.gif").read_bytes())
        self.assertEqual(resp.headers["cache-control"], "public, max-age=604800")

    def test_bad_file_paths(self):
        (self.tmp / "secret.gif").write_bytes(b"secret")
        for url in [
            "/files/..%2Fsecret.gif",
            "/files/%2E%2E/secret.gif",
            "/files/sub/red-cat.gif",
            "/files/red-cat.png",
            "/files/red%20cat.gif",
            "/files/",
        ]:
            with self.subTest(url=url):
                resp = self.client.get(url)
                self.assertEqual(resp.status_code, 404)
                self.assertEqual(resp.content, b"")

    def test_missing_file(self):
        resp = self.client.get("/files/gone.gif")
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.content, b"")

    def test_file_deleted_after_indexing(self):
        (self.src / "c-dog.gif").unlink()
        self.assertEqual(self.client.get("/files/c-dog.gif").status_code, 404)

    def test_files_rejects_other_methods(self):
        resp = self.client.delete("/files/red-cat.gif")
        self.assertEqual(resp.status_code, 405)
        self.assertEqual(resp.content, b"")

    # thumbs

    def test_thumbnail_is_first_frame_jpeg(self):
        resp = self.client.get("/thumbs/red-cat.gif")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.headers["content-type"], "image/jpeg")
        self.assertEqual(resp.headers["cache-control"], "public, max-age=604800")
        with Image.open(io.BytesIO(resp.content)) as im:
            self.assertEqual(im.format, "JPEG")
            self.assertEqual(getattr(im, "n_frames", 1), 1)
            self.assertEqual(im.size, (16, 16))
            r, g, b = im.convert("RGB").getpixel((8, 8))
        self.assertGreater(r, 200)
        self.assertLess(b, 60)

    def test_thumbnail_missing_file(self):
        resp = self.client.get("/thumbs/gone.gif")
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.content, b"")

    def test_thumbnail_of_non_gif_bytes(self):
        for url in ["/thumbs/broken-bytes.gif", "/thumbs/sneaky-png.gif"]:
            with self.subTest(url=url):
                resp = self.client.get(url)
                self.assertEqual(resp.status_code, 500)
                self.assertEqual(resp.content, b"")

    def test_thumbnail_bad_name(self):
        self.assertEqual(self.client.get("/thumbs/..%2Fsecret.gif").status_code, 404)

    def test_thumbs_rejects_other_methods(self):
        resp = self.client.put("/thumbs/red-cat.gif")
        self.assertEqual(resp.status_code, 405)


if __name__ == "__main__":
    unittest.main()
