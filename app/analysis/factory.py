from app.analysis.base import BaseAnalysisClient
from app.analysis.example_client_adapter import ExampleAnalysisClient
from app.analysis.http_client_adapter import HttpAnalysisClient
from app.config.settings import Settings


class AnalysisClientFactory:
    """Creates the configured analysis engine adapter."""

    PROVIDERS = ("http", "example")

    @classmethod
    def create(cls, settings: Settings) -> BaseAnalysisClient:
        provider = settings.analysis_provider.lower()
        if provider == "example":
            return ExampleAnalysisClient()
        if provider == "http":
            base_url = settings.analysis_api_base_url.strip()
            if not base_url:
                raise ValueError("analysis_api_base_url is required for analysis_provider=http")
            return HttpAnalysisClient(
                base_url=base_url,
                timeout_seconds=settings.analysis_api_timeout_seconds,
            )
        raise ValueError(
            f"Unknown analysis provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
        )
