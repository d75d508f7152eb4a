"""Configuration management using Pydantic settings."""

from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Engine settings."""
    
    # General
    debug: bool = Field(default=False, description="Debug mode")
    log_level: str = Field(default="INFO", description="Logging level")
    log_file: Optional[str] = Field(default=None, description="Append log records to this file as well as stdout")
    
    # Randomness
    random_seed: Optional[int] = Field(
        default=None,
        description="Seed for the default uniform source (None = unseeded)"
    )
    
    # Monte Carlo
    n_iterations: int = Field(default=1000, description="Terminal-week samples per simulation run")
    outcome_noise_std: float = Field(default=10.0, description="Std dev of noise added to each outcome score")
    
    # Sensitivity analysis
    sensitivity_iterations: int = Field(default=100, description="Samples per baseline/perturbed mean")
    perturbation_pct: float = Field(default=20.0, description="Up/down perturbation applied to each variable")
    top_influencers: int = Field(default=3, description="Number of top influencers to report")
    
    # Execution
    parallel_min_tasks: int = Field(default=10, description="Batch size above which work fans out to threads")
    
    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


# Global settings instance
settings = Settings()
