import pytest
import os
import sys
import time
import random
from concurrent.futures import ThreadPoolExecutor

# Add project root to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from api.main import create_app
from core.classifier import Disposition, classify
from core.root import resolve_content_root
from fastapi.testclient import TestClient


@pytest.fixture
def build_dir(tmp_path):
    """Create a build directory with a spread of assets."""
    root = tmp_path / "build"
    (root / "assets").mkdir(parents=True)
    (root / "index.html").write_bytes(b"IDX")
    for i in range(20):
        (root / "assets" / f"chunk-{i}.js").write_bytes(f"chunk {i}".encode())
    return root


def test_concurrent_requests(build_dir):
    """Test the dispatcher under concurrent load."""
    app = create_app(resolve_content_root(str(build_dir)))

    paths = (
        [f"/assets/chunk-{i}.js" for i in range(20)]
        + [f"/users/{i}" for i in range(20)]
        + [f"/assets/missing-{i}.js" for i in range(10)]
    )
    random.shuffle(paths)

    def expected(path):
        if path.startswith("/assets/chunk-"):
            return 200, f"chunk {path[len('/assets/chunk-'):-3]}".encode()
        if path.startswith("/users/"):
            return 200, b"IDX"
        return 404, None

    with TestClient(app) as client:
        with ThreadPoolExecutor(max_workers=10) as executor:
            start_time = time.time()
            responses = list(executor.map(client.get, paths))
            end_time = time.time()

    for path, response in zip(paths, responses):
        status_code, body = expected(path)
        assert response.status_code == status_code, path
        if body is not None:
            assert response.content == body, path

    avg_time = (end_time - start_time) / len(paths)
    print(f"Average request time: {avg_time:.4f}s")
    assert avg_time < 0.5


def test_classifier_performance(build_dir):
    """Test classification stays cheap for many paths."""
    root = str(build_dir)
    paths = [f"/route/{i}/detail" for i in range(1000)] + [f"/assets/chunk-{i % 20}.js" for i in range(1000)]

    start_time = time.time()
    results = [classify(p, root) for p in paths]
    execution_time = time.time() - start_time

    assert results.count(Disposition.SERVE_FILE) == 1000
    assert results.count(Disposition.SERVE_INDEX_FALLBACK) == 1000
    print(f"Classified {len(paths)} paths in {execution_time:.3f}s")
    assert execution_time < 5.0


if __name__ == "__main__":
    pytest.main(["-xvs", __file__])
