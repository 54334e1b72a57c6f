import base64
import io
from types import SimpleNamespace

from PIL import Image


def make_png_base64(size=(4, 4), color=(200, 30, 30)):
    buffer = io.BytesIO()
    Image.new('RGB', size, color).save(buffer, format='PNG')
    return base64.b64encode(buffer.getvalue()).decode('ascii')


def make_jpeg_bytes(size=(4, 4)):
    buffer = io.BytesIO()
    Image.new('RGB', size, (10, 120, 200)).save(buffer, format='JPEG')
    return buffer.getvalue()


class MockResponse:
    def __init__(self, status_code=200, json_data=None, content=b""):
        self.status_code = status_code
        self._json = json_data
        self.content = content

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def json(self):
        if self._json is None:
            raise ValueError("No JSON object could be decoded")
        return self._json

    def raise_for_status(self):
        if not self.ok:
            raise RuntimeError(f"HTTP {self.status_code}")


class FakeGeminiClient:
    """Stands in for google.genai.Client; records calls and replays a response or error"""

    def __init__(self, response=None, error=None):
        self.calls = []
        self.api_keys = []
        self._response = response
        self._error = error
        self.models = SimpleNamespace(generate_content=self._generate_content)

    def __call__(self, api_key=None):
        self.api_keys.append(api_key)
        return self

    def _generate_content(self, model, contents, config=None):
        self.calls.append({'model': model, 'contents': contents, 'config': config})
        if self._error is not None:
            raise self._error
        return self._response


def gemini_image_response(data: bytes, mime_type='image/png'):
    part = SimpleNamespace(inline_data=SimpleNamespace(data=data, mime_type=mime_type), text=None)
    text_part = SimpleNamespace(inline_data=None, text="Here is your image")
    return SimpleNamespace(parts=[text_part, part])
