from condo_metrics.models.requests import IncidentIn, IncidentStatusUpdate, MovementIn

__all__ = ["MovementIn", "IncidentIn", "IncidentStatusUpdate"]
