"""Runtime configuration for mediaflow (runtime.yaml + environment)."""
