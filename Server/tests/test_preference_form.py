"""
Tests for the general preferences form of Watchpost Server

Covers resolution of the displayed values, the use-default toggles,
format validation and the preferences produced on submit.
"""

import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from exceptions import InvalidFormatError
from forms.form import RequestParams, SUBMIT_BUTTON
from forms.preference_form import PreferenceForm, ENABLED_MARKER

TIMEZONES = ["Europe/Berlin", "UTC", "America/New_York"]
LOCALES = ["de_DE", "fr_FR"]


def BuildForm(params=None, prefs=None, global_config=None):
    return PreferenceForm(
        RequestParams(params or {}),
        prefs or {},
        global_config,
        locale_codes=LOCALES,
        timezones=TIMEZONES,
        system_timezone="UTC",
        formatter=lambda timestamp, fmt: f"<{fmt}>",
        now=0
    )


def Submit(**fields):
    params = {SUBMIT_BUTTON: "Save Changes"}
    params.update(fields)
    return params


def test_defaults_without_preferences_use_global_config():
    """Test that toggles default to true and values come from config.ini"""
    form = BuildForm(global_config={"language": "de_DE", "dateFormat": "Y.m.d"})

    assert form.GetValue("default_language") == "1"
    assert form.GetValue("language") == "de_DE"
    assert form.GetValue("date_format") == "Y.m.d"
    assert not form.GetField("language").editable
    assert not form.GetField("language").required


def test_defaults_without_global_config_use_fallbacks():
    """Test the hard-coded fallbacks"""
    form = BuildForm()

    assert form.GetValue("language") == "en_US"
    assert form.GetValue("timezone") == "UTC"
    assert form.GetValue("date_format") == "d/m/Y"
    assert form.GetValue("time_format") == "g:i A"
    assert form.GetValue("show_benchmark") == "0"


def test_stored_preference_disables_toggle():
    """Test that a stored date format is shown and editable"""
    form = BuildForm(prefs={"app.dateFormat": "Y-m-d"}, global_config={"dateFormat": "d.m.Y"})

    assert form.GetValue("default_date_format") == "0"
    assert form.GetValue("date_format") == "Y-m-d"
    assert form.GetField("date_format").editable
    assert form.GetField("date_format").required
    # The other preferences still inherit
    assert form.GetValue("default_time_format") == "1"


def test_request_toggle_overrides_stored_state():
    """Test that an auto-submitted toggle is applied to the form"""
    form = BuildForm(params={"default_timezone": "0"})

    assert form.GetValue("default_timezone") == "0"
    assert form.GetField("timezone").editable
    assert form.GetField("timezone").required
    assert form.GetValue("timezone") == "UTC"


def test_request_value_wins_when_editable():
    """Test that a submitted value is shown while the toggle is off"""
    form = BuildForm(
        params={"default_date_format": "0", "date_format": "j. F Y"},
        prefs={"app.dateFormat": "Y-m-d"}
    )

    assert form.GetValue("date_format") == "j. F Y"


def test_empty_request_value_falls_back():
    """Test that an empty submitted value does not replace the stored one"""
    form = BuildForm(
        params={"default_date_format": "0", "date_format": ""},
        prefs={"app.dateFormat": "Y-m-d"}
    )

    assert form.GetValue("date_format") == "Y-m-d"


def test_disabled_field_ignores_submitted_value():
    """Test that the value of a field using the default is not taken from the request"""
    form = BuildForm(
        params={"default_language": "1", "language": "fr_FR"},
        global_config={"language": "de_DE"}
    )

    assert form.GetValue("language") == "de_DE"


def test_helptext_shows_example():
    """Test that the date and time helptexts render an example"""
    form = BuildForm(prefs={"app.timeFormat": "H:i"})

    assert "Example result: <d/m/Y>" in form.GetField("date_format").helptext
    assert "Example result: <H:i>" in form.GetField("time_format").helptext


def test_language_options_include_default_locale():
    """Test that the default locale is always offered"""
    form = BuildForm()

    assert list(form.GetField("language").options) == ["de_DE", "fr_FR", "en_US"]


def test_toggles_are_autosubmitted():
    form = BuildForm()

    for toggle in ("default_language", "default_timezone", "default_date_format", "default_time_format"):
        assert form.GetField(toggle).autosubmit


def test_default_language_yields_none():
    """Test that a use-default toggle stores None regardless of the submitted value"""
    form = BuildForm(params=Submit(default_language="true", language="fr_FR"))

    assert form.IsValid(RequestParams(Submit(default_language="true", language="fr_FR")))
    assert form.GetPreferences()["app.language"] is None


def test_preferences_with_overrides():
    """Test the complete preference mapping"""
    params = Submit(
        default_language="0", language="fr_FR",
        default_timezone="0", timezone="Europe/Berlin",
        default_date_format="0", date_format="Y-m-d",
        default_time_format="1", time_format="H:i",
        show_benchmark=ENABLED_MARKER
    )
    form = BuildForm(params=params)

    assert form.IsValid(RequestParams(params))
    assert form.GetPreferences() == {
        "app.language": "fr_FR",
        "app.timezone": "Europe/Berlin",
        "app.dateFormat": "Y-m-d",
        "app.timeFormat": None,
        "app.show_benchmark": True,
    }


def test_invalid_date_format_is_redisplayed():
    """Test that a bad date format fails validation and stays in the field"""
    params = Submit(default_date_format="false", date_format="not-a-format")
    form = BuildForm(params=params)

    assert not form.IsValid(RequestParams(params))

    date_format = form.GetField("date_format")
    assert date_format.value == "not-a-format"
    assert len(date_format.failures) == 1
    assert isinstance(date_format.failures[0], InvalidFormatError)


def test_invalid_time_format_is_ignored_when_using_default():
    """Test that a disabled field is not validated"""
    params = Submit(default_time_format="1", time_format="not-a-format")
    form = BuildForm(params=params)

    assert form.IsValid(RequestParams(params))
    assert form.GetValue("time_format") == "g:i A"


def test_unknown_timezone_fails():
    params = Submit(default_timezone="0", timezone="Mars/Olympus_Mons")
    form = BuildForm(params=params)

    assert not form.IsValid(RequestParams(params))
    assert form.GetField("timezone").errors == ["'Mars/Olympus_Mons' is not a valid choice"]


def test_show_benchmark_marker():
    """Test that only the enabled marker turns on the benchmark"""
    for submitted, expected in ((ENABLED_MARKER, True), ("0", False), ("yes", False), ("true", False)):
        params = Submit(show_benchmark=submitted)
        form = BuildForm(params=params)
        assert form.IsValid(RequestParams(params))
        assert form.GetPreferences()["app.show_benchmark"] is expected


def test_show_benchmark_unchecked_on_submit():
    """Test that a submission without the checkbox disables the benchmark"""
    params = Submit()
    form = BuildForm(params=params, prefs={"app.show_benchmark": "1"})

    assert form.IsValid(RequestParams(params))
    assert form.GetPreferences()["app.show_benchmark"] is False


def test_show_benchmark_seeded_from_preferences():
    form = BuildForm(prefs={"app.show_benchmark": "1"})

    assert form.GetValue("show_benchmark") == ENABLED_MARKER


def test_form_is_not_submitted_without_button():
    """Test that an auto-submit request does not count as submission"""
    form = BuildForm(params={"default_language": "0"})

    assert not form.IsSubmitted(RequestParams({"default_language": "0"}))


def test_validation_keeps_resolved_values():
    """Test that IsValid() does not copy raw parameters over resolved values"""
    params = Submit(default_date_format="0", date_format="", default_language="0", language="")
    form = BuildForm(params=params, prefs={"app.dateFormat": "Y-m-d", "app.language": "fr_FR"})

    assert form.IsValid(RequestParams(params))

    assert form.GetValue("date_format") == "Y-m-d"
    assert form.GetValue("language") == "fr_FR"
    assert form.GetPreferences()["app.dateFormat"] == "Y-m-d"
