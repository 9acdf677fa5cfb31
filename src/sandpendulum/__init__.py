"""Sand Pendulum: a damped two-axis pendulum tracing patterns in sand."""
__version__ = "1.0.0"
