from .engine import ConfigValue, FormInterpreter, run_form

__all__ = ["ConfigValue", "FormInterpreter", "run_form"]
