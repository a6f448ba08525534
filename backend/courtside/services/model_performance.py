"""
Model Performance Tracking

Accuracy and calibration per model, computed from feedback rows whose
outcome is known. When a prediction has several graded feedback rows only
the latest one counts.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

import pandas as pd

from courtside.schemas import ModelFeedback
from courtside.services.data_client import DataClient

logger = logging.getLogger(__name__)

DEFAULT_RECOMMENDED_MODEL = "ensemble"
MIN_OUTCOMES_FOR_RECOMMENDATION = 10

FRAME_COLUMNS = [
    "prediction_id",
    "model_type",
    "was_correct",
    "confidence_level",
    "calibration_error",
    "surface",
    "feedback_date",
]


def build_outcome_frame(feedback: Iterable[ModelFeedback]) -> pd.DataFrame:
    """One row per graded prediction"""
    df = pd.DataFrame([row.model_dump() for row in feedback], columns=FRAME_COLUMNS)
    if df.empty:
        return df

    df = df[df["was_correct"].notna() & df["calibration_error"].notna()].copy()
    df = df.sort_values("feedback_date", kind="stable")
    df = df.drop_duplicates(subset="prediction_id", keep="last")
    df["was_correct"] = df["was_correct"].astype(bool)
    df["calibration_error"] = df["calibration_error"].astype(float)
    return df.reset_index(drop=True)


class ModelPerformance:
    """Per-model accuracy (0-100) and Brier score (0 perfect, 1 worst)"""

    def __init__(self, outcomes: pd.DataFrame):
        self.outcomes = outcomes

    @classmethod
    def from_feedback(cls, feedback: Iterable[ModelFeedback]) -> "ModelPerformance":
        return cls(build_outcome_frame(feedback))

    def _for_model(self, model_type: str) -> pd.DataFrame:
        if self.outcomes.empty:
            return self.outcomes
        return self.outcomes[self.outcomes["model_type"] == model_type]

    def get_total(self, model_type: str) -> int:
        return int(len(self._for_model(model_type)))

    def get_accuracy(self, model_type: str) -> Optional[float]:
        rows = self._for_model(model_type)
        if rows.empty:
            return None
        return float(rows["was_correct"].mean() * 100)

    def get_calibration_error(self, model_type: str) -> Optional[float]:
        """Brier score from the stored per-prediction calibration errors"""
        rows = self._for_model(model_type)
        if rows.empty:
            return None
        return float(((rows["calibration_error"] / 100) ** 2).mean())

    def get_accuracy_by_confidence(self, model_type: str, confidence: str) -> Optional[Dict[str, Any]]:
        rows = self._for_model(model_type)
        if rows.empty:
            return None
        rows = rows[rows["confidence_level"] == confidence]
        if rows.empty:
            return None

        correct = int(rows["was_correct"].sum())
        return {
            "total": int(len(rows)),
            "correct": correct,
            "accuracy": correct / len(rows) * 100,
        }

    def compare_models(self) -> List[Dict[str, Any]]:
        """Models with at least one graded prediction, best accuracy first"""
        if self.outcomes.empty:
            return []

        rankings = []
        for model_type in self.outcomes["model_type"].dropna().unique():
            rankings.append({
                "model": str(model_type),
                "accuracy": self.get_accuracy(model_type),
                "total": self.get_total(model_type),
                "calibration": self.get_calibration_error(model_type),
            })

        rankings.sort(key=lambda r: (-(r["accuracy"] or 0), r["model"]))
        return rankings

    def get_recommended_model(self) -> str:
        """Best accuracy among models with enough graded predictions"""
        qualified = [r for r in self.compare_models() if r["total"] >= MIN_OUTCOMES_FOR_RECOMMENDATION]
        if not qualified:
            return DEFAULT_RECOMMENDED_MODEL
        return qualified[0]["model"]

    def get_summary(self) -> Dict[str, Any]:
        rankings = self.compare_models()
        return {
            "total_predictions": sum(r["total"] for r in rankings),
            "best_model": rankings[0]["model"] if rankings else None,
            "best_accuracy": rankings[0]["accuracy"] if rankings else None,
            "recommended_model": self.get_recommended_model(),
            "model_rankings": rankings,
        }


async def load_model_performance(client: DataClient) -> ModelPerformance:
    feedback = await client.model_feedback.list()
    performance = ModelPerformance.from_feedback(feedback)
    logger.debug(f"Loaded {len(performance.outcomes)} graded predictions from {len(feedback)} feedback rows")
    return performance
