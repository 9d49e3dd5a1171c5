"""Generate a fake interaction log for testing and development.

Creates a CSV of simulated user-item interactions with timestamps, the input
format the co-occurrence recommender loads. Users tend to stick to a few
"taste groups" of items so that co-occurrence has some structure to find.

Example:
    Run the script directly to generate default data:
        $ python scripts/generate_fake_data.py

    Or import and use programmatically:
        from scripts.generate_fake_data import generate_fake_interactions
        df = generate_fake_interactions(num_users=100, num_items=200)
"""

import argparse
import random
from datetime import datetime, timedelta
from pathlib import Path
from typing import Optional

import pandas as pd

# Default configuration constants
DEFAULT_NUM_USERS = 50
DEFAULT_NUM_ITEMS = 100
DEFAULT_NUM_INTERACTIONS = 1000
DEFAULT_NUM_GROUPS = 5
DEFAULT_IN_GROUP_PROBABILITY = 0.8
DEFAULT_DAYS_BACK = 90
SECONDS_PER_DAY = 86400


def generate_fake_interactions(
    num_users: int = DEFAULT_NUM_USERS,
    num_items: int = DEFAULT_NUM_ITEMS,
    num_interactions: int = DEFAULT_NUM_INTERACTIONS,
    num_groups: int = DEFAULT_NUM_GROUPS,
    in_group_probability: float = DEFAULT_IN_GROUP_PROBABILITY,
    end_date: Optional[datetime] = None,
    seed: Optional[int] = None,
) -> pd.DataFrame:
    """Generate synthetic interaction data.

    Items are split into ``num_groups`` contiguous groups and every user is
    assigned one group. Each interaction picks an item from the user's group
    with probability ``in_group_probability`` and a uniformly random item
    otherwise.

    Returns:
        DataFrame with columns user_id (1..num_users), item_id
        (1..num_items) and timestamp, sorted by timestamp.

    Raises:
        ValueError: If a count is non-positive or the probability is
            outside [0, 1].
    """
    if min(num_users, num_items, num_interactions, num_groups) <= 0:
        raise ValueError(
            "num_users, num_items, num_interactions and num_groups must be positive"
        )
    if not 0.0 <= in_group_probability <= 1.0:
        raise ValueError("in_group_probability must lie in [0, 1]")

    rng = random.Random(seed)

    if end_date is None:
        end_date = datetime.now()
    start_date = end_date - timedelta(days=DEFAULT_DAYS_BACK)

    num_groups = min(num_groups, num_items)
    group_size = num_items // num_groups
    user_groups = {
        user_id: rng.randrange(num_groups) for user_id in range(1, num_users + 1)
    }

    interactions = []
    for _ in range(num_interactions):
        user_id = rng.randint(1, num_users)

        if rng.random() < in_group_probability:
            first = user_groups[user_id] * group_size + 1
            item_id = rng.randint(first, first + group_size - 1)
        else:
            item_id = rng.randint(1, num_items)

        timestamp = start_date + timedelta(
            days=rng.randrange(DEFAULT_DAYS_BACK),
            seconds=rng.randrange(SECONDS_PER_DAY),
        )

        interactions.append({
            "user_id": user_id,
            "item_id": item_id,
            "timestamp": timestamp,
        })

    df = pd.DataFrame(interactions)
    df = df.sort_values("timestamp").reset_index(drop=True)

    return df


def main() -> None:
    """Generate fake interactions and save them to data/fake_interactions.csv."""
    parser = argparse.ArgumentParser(description="Generate a fake interaction log")
    parser.add_argument("--num-users", type=int, default=DEFAULT_NUM_USERS)
    parser.add_argument("--num-items", type=int, default=DEFAULT_NUM_ITEMS)
    parser.add_argument("--num-interactions", type=int, default=DEFAULT_NUM_INTERACTIONS)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument(
        "--output",
        type=str,
        default=str(Path(__file__).parent.parent / "data" / "fake_interactions.csv"),
    )
    args = parser.parse_args()

    print(f"Generating {args.num_interactions} fake interactions...")
    print(f"Users: {args.num_users}, Items: {args.num_items}")

    try:
        df = generate_fake_interactions(
            num_users=args.num_users,
            num_items=args.num_items,
            num_interactions=args.num_interactions,
            seed=args.seed,
        )
    except ValueError as e:
        print(f"Error generating data: {e}")
        return

    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(output_path, index=False)

    print(f"\nData generated successfully!")
    print(f"Saved to: {output_path}")
    print(f"\nData summary:")
    print(f"  Total interactions: {len(df)}")
    print(f"  Unique users: {df['user_id'].nunique()}")
    print(f"  Unique items: {df['item_id'].nunique()}")


if __name__ == "__main__":
    main()
