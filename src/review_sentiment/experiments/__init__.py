# Experiment orchestration and reporting

from .experimental_pipeline import ExperimentalPipeline

__all__ = ["ExperimentalPipeline"]
