#!/usr/bin/env python3
"""
Generate Batch Predictions

Runs one prediction model over every scheduled match in the active data
source and stores the results.

Usage:
    python generate_predictions.py [--model MODEL] [--dry-run]
"""
import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent))

from courtside.config import settings
from courtside.schemas import ModelType
from courtside.services.data_source import get_data_source_router
from courtside.services.prediction_service import get_prediction_service

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


async def generate_predictions(model_type: str, dry_run: bool = False):
    """
    Predict every scheduled match with one model.

    Args:
        model_type: Registered model name (e.g. 'ensemble', 'elo')
        dry_run: Print the predictions without storing them
    """
    print(f"\n🎾 Generating '{model_type}' predictions for scheduled matches")
    print("=" * 60)

    source_router = get_data_source_router()
    client = source_router.current_client
    print(f"Data source: {source_router.current_source}")

    try:
        service = get_prediction_service(client)
        predictions = await service.generate_scheduled_predictions(model_type=model_type, save=not dry_run)

        for prediction in predictions:
            print(
                f"  {prediction.match_id}: {prediction.predicted_winner_name} "
                f"({prediction.player1_win_probability} / {prediction.player2_win_probability}, "
                f"{prediction.confidence_level})"
            )

        print()
        action = "Generated" if dry_run else "Stored"
        print(f"✅ {action} {len(predictions)} predictions")

    finally:
        await client.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Generate predictions for scheduled matches")
    parser.add_argument(
        "--model",
        default=ModelType.ENSEMBLE.value,
        choices=[model.value for model in ModelType],
        help="Model to run",
    )
    parser.add_argument("--dry-run", action="store_true", help="Do not store the predictions")
    args = parser.parse_args()

    asyncio.run(generate_predictions(args.model, dry_run=args.dry_run))
