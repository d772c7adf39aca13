"""ADMS DTO validation: rule primitives, validation pipeline, audit-trail
consistency checks, and entity-to-DTO conversion for the legal document
management system.
"""

__version__ = "1.0.0"
