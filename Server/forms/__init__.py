"""
Watchpost Server - Forms Package

Form base classes, validators, and the role and preference forms.
"""

from forms.form import Form, FormField, RequestParams, SUBMIT_BUTTON
from forms.role_form import RoleForm, ConfirmRemovalForm
from forms.preference_form import PreferenceForm

__all__ = [
    'Form',
    'FormField',
    'RequestParams',
    'SUBMIT_BUTTON',
    'RoleForm',
    'ConfirmRemovalForm',
    'PreferenceForm',
]
