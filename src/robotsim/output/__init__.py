"""Output layer — turns ServiceResult into console text or JSON."""
