from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # seed for reproducibility
    SEED: int = 33

    # ---- Visualization ----
    MPL_FIGSIZE: tuple[int, int] = (10, 4)
    MPL_DPI: int = 150

    # ---- Warnings ----
    IGNORE_DEPRECATION_WARNINGS: bool = True
    IGNORE_FUTURE_WARNINGS: bool = True

    MLFLOW_TRACKING_URI: str | None = None
    MLFLOW_EXPERIMENT_NAME: str | None = "flavor-diet-bayes"

    # kaggle config
    KAGGLE_USERNAME: str | None = None
    KAGGLE_KEY: str | None = None
    KAGGLE_DATASET: str = "nehaprabhavalkar/indian-food-101"
    KAGGLE_FILE: str = "indian_food.csv"

    # dataset path (local copy takes precedence over kaggle)
    DATASET_PATH: str | None = None

    # sampler config
    DRAWS: int = 2000
    TUNE: int = 1000
    CHAINS: int = 4
    CORES: int = 1
    MAX_TREEDEPTH: int = 12
    TARGET_ACCEPT: float = 0.9

    # PyMC / PyTensor stdlib loggers
    SAMPLER_LOG_LEVEL: str = "WARNING"

    # ArviZ defaults
    CREDIBLE_LEVEL: float = 0.95
    ARVIZ_MAX_SUBPLOTS: int = 40

    # prior-predictive simulation size
    PRIOR_PREDICTIVE_DRAWS: int = 4000

    # output directories
    ARTIFACT_DIR: str = "artifacts"
    REPORT_DIR: str = "reports"


settings = Settings()
