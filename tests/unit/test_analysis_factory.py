import pytest

from app.analysis.example_client_adapter import ExampleAnalysisClient
from app.analysis.factory import AnalysisClientFactory
from app.analysis.http_client_adapter import HttpAnalysisClient
from app.config.settings import Settings


class TestAnalysisClientFactory:
    def test_creates_example_client(self) -> None:
        client = AnalysisClientFactory.create(Settings(analysis_provider="example"))

        assert isinstance(client, ExampleAnalysisClient)

    def test_creates_http_client(self) -> None:
        client = AnalysisClientFactory.create(
            Settings(analysis_provider="http", analysis_api_base_url="http://engine:8000")
        )
        try:
            assert isinstance(client, HttpAnalysisClient)
        finally:
            client.close()

    def test_provider_is_case_insensitive(self) -> None:
        client = AnalysisClientFactory.create(Settings(analysis_provider="EXAMPLE"))

        assert isinstance(client, ExampleAnalysisClient)

    def test_http_requires_base_url(self) -> None:
        with pytest.raises(ValueError, match="analysis_api_base_url is required"):
            AnalysisClientFactory.create(
                Settings(analysis_provider="http", analysis_api_base_url="  ")
            )

    def test_unknown_provider_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown analysis provider 'grpc'"):
            AnalysisClientFactory.create(Settings(analysis_provider="grpc"))
