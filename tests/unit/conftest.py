import pytest

from flowjob.adapters.mock import MockAnalysisManager
from flowjob.core.weights import default_weight_histograms
from flowjob.models.enums import AnalysisMode


@pytest.fixture
def mock_manager():
    return MockAnalysisManager()


@pytest.fixture
def weights():
    return default_weight_histograms()


@pytest.fixture
def local_settings(settings, tmp_path):
    data_dir = tmp_path / "data"
    for i in range(4):
        (data_dir / f"{i:03d}").mkdir(parents=True)
        (data_dir / f"{i:03d}" / "AliAOD.root").write_bytes(b"")
    return settings.model_copy(update={"analysis_mode": AnalysisMode.LOCAL, "data_dir": str(data_dir)})
