"""
Pytest configuration and global fixtures.
"""
import asyncio
import os
import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.exceptions import BackendError
from core.models import ImageRecord, Region
from gateway.base import ProcessingGateway
from stores.session import ScanSession


class FakeGateway(ProcessingGateway):
    """
    In-memory backend.

    Requests can be held back with ``hold(key)`` (key is the region id for
    process_region, the path otherwise) and let through with ``release``, so
    tests decide the order responses arrive in.
    """

    def __init__(self):
        self.calls = []
        self.failures = {}
        self.gates = {}
        self.closed = False

    def hold(self, key):
        self.gates[key] = asyncio.Event()

    def release(self, key):
        self.gates[key].set()

    def fail(self, operation, message="backend exploded", key=None):
        """Make ``operation`` fail, for every request or only for ``key``."""
        self.failures[(operation, key)] = message

    async def _call(self, operation, payload):
        self.calls.append((operation, payload))
        key = payload['region']['id'] if operation == 'process_region' else payload.get('path')
        gate = self.gates.get(key)
        if gate is not None:
            await gate.wait()
        message = self.failures.get((operation, key), self.failures.get((operation, None)))
        if message is not None:
            raise BackendError(operation, message)
        return getattr(self, f"_respond_{operation}")(payload)

    async def close(self):
        self.closed = True

    def _respond_load_image(self, payload):
        path = payload['path']
        return {
            'id': f"img-{os.path.basename(path)}",
            'name': os.path.basename(path),
            'path': path,
            'thumbnail': 'data:image/png;base64,',
            'width': 800,
            'height': 600,
            'rotation': 0
        }

    def _respond_load_image_full(self, payload):
        return f"full:{payload['path']}"

    def _respond_process_region(self, payload):
        region = payload['region']
        text = f"{region['id']}@{region['rotation']}/{payload['blur']}/{payload['threshold']}"
        return {
            'regionId': region['id'],
            'rawText': text,
            'cells': [[{'text': text, 'originalText': text, 'confidenceScore': 0.9}]]
        }

    def _respond_preprocess_image(self, payload):
        return f"preview:{payload['path']}:{payload['blur']}:{payload['threshold']}"

    def _respond_save_results(self, payload):
        return f"/tmp/results.{payload['format']}"


def make_record(name, **kwargs):
    """Image record whose id and path derive from ``name``."""
    return ImageRecord(
        id=kwargs.pop('id', f"img-{name}"),
        name=name,
        source_path=kwargs.pop('source_path', f"/scans/{name}"),
        width=kwargs.pop('width', 800),
        height=kwargs.pop('height', 600),
        **kwargs
    )


@pytest.fixture
def record_factory():
    """Factory for image records."""
    return make_record


@pytest.fixture
def session():
    """Fresh scan session."""
    scan_session = ScanSession()
    yield scan_session
    scan_session.close()


@pytest.fixture
def fake_gateway():
    """Scriptable in-memory gateway."""
    return FakeGateway()


@pytest.fixture
def sample_region():
    """A region in the top-left corner."""
    return Region(id="r-1", x=10, y=20, width=100, height=40, label="total")


@pytest.fixture
def sample_image_path(tmp_path):
    """Create a sample test image."""
    from PIL import Image

    img_path = tmp_path / "test_image.png"
    img = Image.new('RGB', (800, 600), color='white')
    img.save(img_path)

    return str(img_path)


@pytest.fixture
def sample_data_url():
    """Provide a small PNG as a data URL."""
    import base64
    from io import BytesIO
    from PIL import Image

    img = Image.new('RGB', (120, 80), color='blue')
    buf = BytesIO()
    img.save(buf, format='PNG')
    return "data:image/png;base64," + base64.b64encode(buf.getvalue()).decode()
