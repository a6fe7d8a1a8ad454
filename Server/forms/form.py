"""
Watchpost Server - Form Base Classes

Request parameter access, form fields and the submit/validate cycle the
role and preference forms share.

A form is submitted when the submit button's parameter is present. A POST
without it (sent by an auto-submit toggle) only re-renders the form.
"""

import logging
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from exceptions import InvalidValueError, MissingParameterError, WatchpostError

logger = logging.getLogger(__name__)

# Name of the submit button parameter
SUBMIT_BUTTON = "btn_submit"

# Values a checkbox or toggle parameter is considered checked with
TRUE_VALUES = ("1", "true", "on", "yes")


def ParseBool(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in TRUE_VALUES


class RequestParams:
    """
    Read-only view of the parameters of one request

    Built from (name, value) pairs so repeated names (multi-selects) keep
    all their values. GetParam returns the last value of a name.
    """

    def __init__(self, pairs: Optional[Iterable[Tuple[str, Any]]] = None):
        self._params: Dict[str, List[Any]] = {}
        if isinstance(pairs, dict):
            pairs = pairs.items()
        for name, value in pairs or []:
            if isinstance(value, list):
                self._params.setdefault(name, []).extend(value)
            else:
                self._params.setdefault(name, []).append(value)

    @classmethod
    async def FromRequest(cls, request) -> "RequestParams":
        """
        Collect query string and form body parameters of a request

        Args:
            request: Starlette/FastAPI request

        Returns:
            RequestParams: Query parameters followed by form fields
        """
        pairs = list(request.query_params.multi_items())
        if request.method == "POST":
            form = await request.form()
            pairs.extend((name, value) for name, value in form.multi_items() if isinstance(value, str))
        return cls(pairs)

    def Has(self, name: str) -> bool:
        return name in self._params

    def GetParam(self, name: str, default=None):
        values = self._params.get(name)
        if not values:
            return default
        return values[-1]

    def GetList(self, name: str) -> List[Any]:
        return list(self._params.get(name, []))

    def GetRequiredParam(self, name: str) -> str:
        """
        Get a parameter that must be present and non-empty

        Raises:
            MissingParameterError: If the parameter is absent or empty
        """
        value = self.GetParam(name)
        if value is None or str(value).strip() == "":
            raise MissingParameterError(name)
        return value


@dataclass
class FormField:
    """
    One form element

    value is the computed display value. A field that is not editable is
    rendered disabled and its submitted value is ignored.
    """
    name: str
    label: str
    type: str = "text"
    value: Any = None
    required: bool = False
    editable: bool = True
    options: Dict[str, str] = field(default_factory=dict)
    helptext: Optional[str] = None
    autosubmit: bool = False
    validators: List[Any] = field(default_factory=list)
    failures: List[WatchpostError] = field(default_factory=list)

    @property
    def errors(self) -> List[str]:
        return [failure.message for failure in self.failures]

    def IsEmpty(self) -> bool:
        if isinstance(self.value, list):
            return len(self.value) == 0
        return self.value is None or str(self.value).strip() == ""

    def Validate(self) -> bool:
        """
        Run the required check and all validators against the current value

        Returns:
            bool: True if the value is acceptable
        """
        self.failures = []
        if not self.editable:
            return True

        if self.IsEmpty():
            if self.required:
                self.failures.append(InvalidValueError("Value is required"))
            return not self.failures

        for validator in self.validators:
            try:
                validator.Validate(self.value)
            except WatchpostError as e:
                self.failures.append(e)

        return not self.failures


class Form:
    """
    Ordered collection of fields with form level errors
    """

    def __init__(self, name: str, submit_label: str = "Submit"):
        self.name = name
        self.submit_label = submit_label
        self.fields: "OrderedDict[str, FormField]" = OrderedDict()
        self.errors: List[str] = []

    def AddField(self, form_field: FormField) -> FormField:
        self.fields[form_field.name] = form_field
        return form_field

    def GetField(self, name: str) -> FormField:
        return self.fields[name]

    def GetValue(self, name: str, default=None):
        form_field = self.fields.get(name)
        return form_field.value if form_field is not None else default

    def AddError(self, message: str) -> None:
        self.errors.append(message)

    def IsSubmitted(self, params: RequestParams) -> bool:
        return params.Has(SUBMIT_BUTTON)

    def Populate(self, params: RequestParams) -> None:
        """
        Copy submitted values into the editable fields

        Args:
            params: Request parameters
        """
        for form_field in self.fields.values():
            if not form_field.editable:
                continue
            if form_field.type == "multiselect":
                form_field.value = [value for value in params.GetList(form_field.name) if value]
            elif form_field.type == "checkbox":
                form_field.value = "1" if ParseBool(params.GetParam(form_field.name, "0")) else "0"
            elif params.Has(form_field.name):
                form_field.value = params.GetParam(form_field.name)

    def IsValid(self, params: Optional[RequestParams] = None) -> bool:
        """
        Populate the form from the request (if given) and validate every field

        Args:
            params: Request parameters, None to validate the current values

        Returns:
            bool: True if no field failed
        """
        if params is not None:
            self.Populate(params)

        valid = True
        for form_field in self.fields.values():
            if not form_field.Validate():
                valid = False

        if not valid:
            logger.debug(f"Form '{self.name}' failed validation")
        return valid

    def GetValues(self) -> Dict[str, Any]:
        return {name: form_field.value for name, form_field in self.fields.items()}
