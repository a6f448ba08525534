"""
Performance API Endpoints

Accuracy and calibration of each prediction model, computed from the
feedback rows of graded predictions.
"""
from fastapi import APIRouter, Depends

from courtside.schemas import ConfidenceLevel, ModelType
from courtside.services.data_client import DataClient
from courtside.services.data_source import get_data_client
from courtside.services.model_performance import load_model_performance

router = APIRouter()


@router.get("/summary")
async def get_performance_summary(client: DataClient = Depends(get_data_client)):
    """
    Overall model comparison.

    Returns the number of graded predictions, the most accurate model,
    every model's accuracy and Brier score, and the recommended model.
    """
    performance = await load_model_performance(client)
    return performance.get_summary()


@router.get("/models/{model_type}")
async def get_model_performance(
    model_type: ModelType,
    client: DataClient = Depends(get_data_client)
):
    """Accuracy, Brier score and per-confidence accuracy for one model"""
    performance = await load_model_performance(client)
    name = model_type.value

    return {
        "model": name,
        "total": performance.get_total(name),
        "accuracy": performance.get_accuracy(name),
        "calibration": performance.get_calibration_error(name),
        "by_confidence": {
            level.value: performance.get_accuracy_by_confidence(name, level.value)
            for level in ConfidenceLevel
        },
    }
