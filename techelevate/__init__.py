"""TechElevate product showcase backend."""
