"""TourLead offers service: job offers between tour companies and guides."""

__version__ = "1.0.0"
