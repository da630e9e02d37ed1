"""Textual application of the admin console."""

from .admin_app import LOAN_PERIODS, IssueRequest, ShelfdeskApp

__all__ = ["ShelfdeskApp", "IssueRequest", "LOAN_PERIODS"]
