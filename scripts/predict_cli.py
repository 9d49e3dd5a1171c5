"""CLI script for getting item recommendations.

Useful for testing and evaluation. Builds the co-occurrence recommender from
an interaction log, gets recommendations for a user and prints them to the
console.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, Hashable, List, Optional, Tuple

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from coocrec.config import settings
from coocrec.exceptions import CoocRecException
from coocrec.recommender.recommender import create_recommender_from_csv

# Setup logging
logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s: %(message)s"
)
logger = logging.getLogger(__name__)


def get_recommendations(
    user_id: int,
    data_path: str = settings.data_path,
    top_n: int = settings.default_top_n,
    normalize_on_popularity: bool = True,
    only_recommend_from_similar_taste: bool = True,
    allow_cold_start: bool = True,
    explain: bool = False,
) -> Tuple[List[Hashable], Optional[Dict]]:
    """Get recommendations for a user.

    Args:
        user_id: User ID to get recommendations for
        data_path: Interaction log CSV
        top_n: Number of recommendations to return
        normalize_on_popularity: Divide co-occurrence by item popularity
        only_recommend_from_similar_taste: Drop items with a zero score
        allow_cold_start: Fall back to popular items for unknown users
        explain: If True, also return score breakdown

    Returns:
        Tuple of (recommendations list, optional scores dict)
    """
    try:
        recommender = create_recommender_from_csv(
            data_path,
            user_col=settings.user_col,
            item_col=settings.item_col,
            normalize_on_popularity=normalize_on_popularity,
        )

        result = recommender.recommend(
            user_id,
            top_n=top_n,
            allow_cold_start=allow_cold_start,
            only_recommend_from_similar_taste=only_recommend_from_similar_taste,
            return_scores=explain,
        )
        if explain:
            return result
        return result, None

    except FileNotFoundError as e:
        print(f"Error: Interaction data not found at {data_path}", file=sys.stderr)
        print(f"  {e}", file=sys.stderr)
        sys.exit(1)
    except (CoocRecException, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def main() -> None:
    """Main CLI function."""
    parser = argparse.ArgumentParser(
        description="Get item recommendations for a user",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/predict_cli.py 42
  python scripts/predict_cli.py 42 --top-n 5
  python scripts/predict_cli.py 42 --raw-counts --include-unrelated
  python scripts/predict_cli.py 42 --explain
        """
    )

    parser.add_argument(
        "user_id",
        type=int,
        help="User ID to get recommendations for"
    )

    parser.add_argument(
        "--data-path",
        type=str,
        default=settings.data_path,
        help=f"Interaction log CSV (default: {settings.data_path})"
    )

    parser.add_argument(
        "--top-n",
        type=int,
        default=settings.default_top_n,
        help=f"Number of recommendations to return (default: {settings.default_top_n})"
    )

    parser.add_argument(
        "--raw-counts",
        action="store_true",
        help="Use raw co-occurrence counts instead of popularity-normalized rates"
    )

    parser.add_argument(
        "--include-unrelated",
        action="store_true",
        help="Also list items that never co-occur with the user's items"
    )

    parser.add_argument(
        "--no-cold-start",
        action="store_true",
        help="Fail for unknown users instead of recommending popular items"
    )

    parser.add_argument(
        "--explain",
        action="store_true",
        help="Show score breakdown for recommendations"
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging"
    )

    args = parser.parse_args()

    if args.verbose:
        logging.getLogger().setLevel(logging.INFO)

    recommendations, scores = get_recommendations(
        user_id=args.user_id,
        data_path=args.data_path,
        top_n=args.top_n,
        normalize_on_popularity=not args.raw_counts,
        only_recommend_from_similar_taste=not args.include_unrelated,
        allow_cold_start=not args.no_cold_start,
        explain=args.explain,
    )

    print(f"\nRecommendations for user {args.user_id}:")
    print(f"  Top {len(recommendations)} items: {recommendations}")

    if args.explain and scores:
        print(f"\nScore breakdown:")
        print(f"  Method: {scores['method']}")
        for key in ("scores", "popularity"):
            if scores.get(key):
                print(f"  {key.capitalize()}: {scores[key]}")

    print()


if __name__ == "__main__":
    main()
