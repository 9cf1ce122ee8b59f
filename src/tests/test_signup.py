import pytest
from pydantic import ValidationError

from src.tavus_bridge.contracts.coaching import UserProfile
from src.tavus_bridge.inputs.signup import is_valid_email


@pytest.mark.parametrize(
    "email",
    ["alex@example.com", "a.b+c@mail.example.co.uk", "x@y.io"],
)
def test_valid_emails(email):
    assert is_valid_email(email)


@pytest.mark.parametrize(
    "email",
    [
        "",
        "alex",
        "alex@example",
        "alex@example.c",
        "alex@example.c0m",
        "alex@.com",
        "alex@@example.com",
        "al ex@example.com",
        "alex@example.com.",
    ],
)
def test_invalid_emails(email):
    assert not is_valid_email(email)


def test_profile_defaults_and_stripping():
    profile = UserProfile(name="  Alex ", role="SWE", email=" alex@example.com ")

    assert profile.name == "Alex"
    assert profile.email == "alex@example.com"
    assert profile.topic == "Salary Negotiation"


def test_profile_rejects_blank_name_and_bad_email():
    with pytest.raises(ValidationError):
        UserProfile(name="   ", role="SWE", email="alex@example.com")
    with pytest.raises(ValidationError):
        UserProfile(name="Alex", role="SWE", email="alex@example")
