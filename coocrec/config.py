import os


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    # Interaction log used by the API and CLI
    data_path: str = os.getenv("COOCREC_DATA_PATH", "data/fake_interactions.csv")
    user_col: str = os.getenv("COOCREC_USER_COL", "user_id")
    item_col: str = os.getenv("COOCREC_ITEM_COL", "item_id")

    # Recommendation defaults
    normalize_on_popularity: bool = _env_bool("COOCREC_NORMALIZE", True)
    default_top_n: int = int(os.getenv("COOCREC_TOP_N", "10"))

    # Batch inference worker threads
    n_jobs: int = int(os.getenv("COOCREC_N_JOBS", "1"))

    log_level: str = os.getenv("COOCREC_LOG_LEVEL", "INFO")


settings = Settings()
