from app.analysis.base import BaseAnalysisClient
from app.analysis.factory import AnalysisClientFactory
from app.analysis.models import AnalysisResult

__all__ = ["AnalysisClientFactory", "AnalysisResult", "BaseAnalysisClient"]
