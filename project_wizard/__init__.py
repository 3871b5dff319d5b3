"""Project Wizard -- scaffolds new development projects from a short questionnaire."""

__version__ = "0.1.0"
