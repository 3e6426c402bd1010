from .simulation_stepper import SimulationStepper, StepperMode
from .phenotype_series import generate_phenotype_series, visible_window

__all__ = ["SimulationStepper", "StepperMode", "generate_phenotype_series", "visible_window"]
