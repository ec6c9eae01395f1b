from .reporter import BootstrapHealthReporter, StepHealthRecord, StepStatus

__all__ = ['BootstrapHealthReporter', 'StepHealthRecord', 'StepStatus']
