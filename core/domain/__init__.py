"""Domain models for diabetes measurement prefill."""
