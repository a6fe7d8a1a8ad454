"""
Watchpost Server - General Preferences Form

Language, timezone, date format and time format preferences, each with a
"use default" toggle, plus the benchmark flag.

The value shown for a preference is resolved in this order:

    submitted value -> user's preference -> global configuration -> fallback

A submitted value only counts while the field is editable, i.e. while its
toggle is off. Toggles are auto-submitted so the form is recomputed when
one changes.
"""

import time
from typing import Any, Callable, Dict, Iterable, Optional

import date_formatter
import translator
from forms.form import Form, FormField, ParseBool, RequestParams
from forms.validators import DateFormatValidator, InArrayValidator, TimeFormatValidator

# Checkbox value that enables the benchmark
ENABLED_MARKER = "1"

DEFAULT_DATE_FORMAT = "d/m/Y"
DEFAULT_TIME_FORMAT = "g:i A"

FORMAT_DOCS_LINK = "https://www.php.net/manual/en/datetime.format.php"


class PreferenceForm(Form):
    """
    General user preferences

    Args:
        params: Parameters of the current request
        user_preferences: The user's stored app.* preferences
        global_config: The [global] section of config.ini
        locale_codes: Installed locales (the default locale is always offered)
        timezones: Valid timezone identifiers
        system_timezone: Fallback timezone
        formatter: Renders the example output of the date/time formats
        now: Timestamp of the example output
    """

    def __init__(self, params: RequestParams, user_preferences: Dict[str, Any],
                 global_config: Optional[Dict[str, str]] = None,
                 locale_codes: Iterable[str] = (), timezones: Iterable[str] = (),
                 system_timezone: str = "UTC",
                 formatter: Callable[[float, str], str] = date_formatter.Format,
                 now: Optional[float] = None):
        super().__init__("form_preference_set", "Save Changes")
        self.params = params
        self.user_preferences = user_preferences or {}
        self.global_config = global_config or {}
        self.locale_codes = list(locale_codes)
        self.timezones = list(timezones)
        self.system_timezone = system_timezone
        self.formatter = formatter
        self.now = now if now is not None else time.time()
        self.Create()

    def _UseDefault(self, toggle: str, key: str) -> bool:
        if self.params.Has(toggle):
            return ParseBool(self.params.GetParam(toggle))
        return key not in self.user_preferences

    def _ResolveValue(self, field_name: str, editable: bool, key: str, global_key: str, fallback: str) -> str:
        if editable:
            submitted = self.params.GetParam(field_name, "")
            if submitted:
                return submitted
        value = self.user_preferences.get(key)
        if value is None:
            value = self.global_config.get(global_key)
        if value is None:
            value = fallback
        return value

    def _AddOverridable(self, toggle: str, toggle_label: str, form_field: FormField,
                        key: str, global_key: str, fallback: str) -> FormField:
        use_default = self._UseDefault(toggle, key)

        self.AddField(FormField(
            name=toggle,
            label=toggle_label,
            type="checkbox",
            value="1" if use_default else "0",
            autosubmit=True
        ))

        form_field.editable = not use_default
        form_field.required = not use_default
        form_field.value = self._ResolveValue(form_field.name, form_field.editable, key, global_key, fallback)
        return self.AddField(form_field)

    def _FormatHelp(self, what: str, format_string: str) -> str:
        example = self.formatter(self.now, format_string)
        return (f"Display {what} according to this format. (See {FORMAT_DOCS_LINK} for possible values.) "
                f"Example result: {example}")

    def Create(self) -> None:
        languages = {code: code for code in self.locale_codes}
        languages[translator.DEFAULT_LOCALE] = translator.DEFAULT_LOCALE
        self._AddOverridable(
            "default_language", "Use Default Language",
            FormField(
                name="language",
                label="Your Current Language",
                type="select",
                options=languages,
                helptext="Use the following language to display texts and messages",
                validators=[InArrayValidator(languages)]
            ),
            "app.language", "language", translator.DEFAULT_LOCALE
        )

        timezones = {tz: tz for tz in self.timezones}
        self._AddOverridable(
            "default_timezone", "Use Default Timezone",
            FormField(
                name="timezone",
                label="Your Current Timezone",
                type="select",
                options=timezones,
                helptext="Use the following timezone for dates and times",
                validators=[InArrayValidator(timezones)]
            ),
            "app.timezone", "timezone", self.system_timezone
        )

        date_format = self._AddOverridable(
            "default_date_format", "Use Default Date Format",
            FormField(
                name="date_format",
                label="Preferred Date Format",
                validators=[DateFormatValidator()]
            ),
            "app.dateFormat", "dateFormat", DEFAULT_DATE_FORMAT
        )
        date_format.helptext = self._FormatHelp("dates", date_format.value)

        time_format = self._AddOverridable(
            "default_time_format", "Use Default Time Format",
            FormField(
                name="time_format",
                label="Preferred Time Format",
                validators=[TimeFormatValidator()]
            ),
            "app.timeFormat", "timeFormat", DEFAULT_TIME_FORMAT
        )
        time_format.helptext = self._FormatHelp("times", time_format.value)

        if self.params.Has("show_benchmark"):
            show_benchmark = str(self.params.GetParam("show_benchmark"))
        elif self.IsSubmitted(self.params):
            show_benchmark = "0"
        else:
            show_benchmark = str(self.user_preferences.get("app.show_benchmark", "0"))
        self.AddField(FormField(
            name="show_benchmark",
            label="Use benchmark",
            type="checkbox",
            value=show_benchmark
        ))

    def Populate(self, params: RequestParams) -> None:
        """
        Leave the resolved values untouched

        Every field was already resolved from the request given to the
        constructor, including the fallbacks for toggles and empty values.
        Copying the raw parameters again would replace those fallbacks, so
        IsValid(params) only validates the resolved values.
        """

    def GetPreferences(self) -> Dict[str, Any]:
        """
        Return the preferences set in this form

        Returns:
            dict: app.* keys, None for preferences that use the default
        """
        values = self.GetValues()

        def Override(toggle: str, field_name: str):
            return None if ParseBool(values[toggle]) else values[field_name]

        return {
            "app.language": Override("default_language", "language"),
            "app.timezone": Override("default_timezone", "timezone"),
            "app.dateFormat": Override("default_date_format", "date_format"),
            "app.timeFormat": Override("default_time_format", "time_format"),
            "app.show_benchmark": values["show_benchmark"] == ENABLED_MARKER,
        }
