"""Tests for first-match request validation."""

import unittest

from elearning.core.validators import (
    validate_course,
    validate_login,
    validate_password,
    validate_register,
    validate_reset_password,
)


def register_payload(password="Abcdef1!", **overrides):
    payload = {"name": "A", "email": "a@x.com", "password": password}
    payload.update(overrides)
    return payload


def course_payload(**overrides):
    payload = {
        "title": "Python Basics",
        "category": "Programming",
        "level": "BEGINNER",
        "description": "Learn Python from scratch.",
        "instructor": "Ada",
        "duration": 90,
        "price": 10.0,
    }
    payload.update(overrides)
    return payload


class TestRegisterValidation(unittest.TestCase):
    def test_valid_payload_has_no_errors(self) -> None:
        self.assertEqual(validate_register(register_payload()), [])

    def test_missing_fields(self) -> None:
        for field in ("name", "email", "password"):
            with self.subTest(field=field):
                self.assertEqual(
                    validate_register(register_payload(**{field: None})),
                    ["Please provide all required fields"],
                )
        self.assertEqual(
            validate_register(register_payload(name="")),
            ["Please provide all required fields"],
        )

    def test_each_password_rule_reports_only_its_message(self) -> None:
        cases = {
            "Ab1!": "Password must be between 6 and 20 characters",
            "Abcdefghijk1!abcdefgh": "Password must be between 6 and 20 characters",
            "ABCDEF1!": "Password must contain a lowercase letter",
            "abcdef1!": "Password must contain an uppercase letter",
            "Abcdefg!": "Password must contain a number",
            "Abcdef12": "Password must contain a special character",
            "Abcdef1!~": "Password must contain only alphanumeric characters and special characters",
            "Abc def1!": "Password must contain only alphanumeric characters and special characters",
        }
        for password, message in cases.items():
            with self.subTest(password=password):
                self.assertEqual(validate_register(register_payload(password)), [message])

    def test_first_violated_rule_wins(self) -> None:
        # Too short, no uppercase, no digit, no special: only length is reported.
        self.assertEqual(
            validate_register(register_payload("abc")),
            ["Password must be between 6 and 20 characters"],
        )
        # Missing fields outrank every password rule.
        self.assertEqual(
            validate_register(register_payload("x", name=None)),
            ["Please provide all required fields"],
        )

    def test_trailing_newline_is_not_accepted(self) -> None:
        self.assertEqual(
            validate_register(register_payload("Abcdef1!\n")),
            ["Password must contain only alphanumeric characters and special characters"],
        )


class TestOtherValidators(unittest.TestCase):
    def test_login_requires_email_and_password(self) -> None:
        self.assertEqual(validate_login({"email": "a@x.com", "password": "x"}), [])
        self.assertEqual(
            validate_login({"email": "a@x.com", "password": ""}),
            ["Please provide all required fields"],
        )

    def test_password_update_rules(self) -> None:
        self.assertEqual(validate_password({"password": "Newpass1!"}), [])
        self.assertEqual(
            validate_password({"password": "newpass1!"}),
            ["Password must contain an uppercase letter"],
        )

    def test_reset_password_order(self) -> None:
        self.assertEqual(
            validate_reset_password({"password": "Abcdef1!", "confirm_password": None}),
            ["Password and confirm password are required"],
        )
        self.assertEqual(
            validate_reset_password({"password": "abc", "confirm_password": "abd"}),
            ["Passwords do not match"],
        )
        self.assertEqual(
            validate_reset_password({"password": "abc", "confirm_password": "abc"}),
            ["Password must be between 6 and 20 characters"],
        )
        self.assertEqual(
            validate_reset_password({"password": "Abcdef1!", "confirm_password": "Abcdef1!"}),
            [],
        )


class TestCourseValidation(unittest.TestCase):
    def test_valid_course(self) -> None:
        self.assertEqual(validate_course(course_payload()), [])
        self.assertEqual(validate_course(course_payload(level="INTERMEDIATE", price=0.5)), [])

    def test_zero_duration_or_price_counts_as_not_provided(self) -> None:
        for field in ("duration", "price"):
            with self.subTest(field=field):
                self.assertEqual(
                    validate_course(course_payload(**{field: 0})),
                    ["Please provide all required fields"],
                )

    def test_rules_in_order(self) -> None:
        cases = [
            (course_payload(instructor=""), "Please provide all required fields"),
            (course_payload(title="Py"), "Title must be at least 3 characters"),
            (course_payload(description="Too short"), "Description must be at least 10 characters"),
            (course_payload(duration=9), "Duration must be at least 10 minute"),
            (course_payload(price=-1), "Price must be at least $0"),
            (course_payload(level="ADVANCED"), "Level must be beginner, intermediate, or advanced"),
            (course_payload(level="beginner"), "Level must be beginner, intermediate, or advanced"),
        ]
        for payload, message in cases:
            with self.subTest(message=message, payload=payload):
                self.assertEqual(validate_course(payload), [message])

    def test_expert_level_is_rejected(self) -> None:
        self.assertEqual(
            validate_course(course_payload(level="Expert")),
            ["Level must be beginner, intermediate, or advanced"],
        )

    def test_negative_price_reports_a_single_message(self) -> None:
        self.assertEqual(
            validate_course(course_payload(price=-5, level="ADVANCED")),
            ["Price must be at least $0"],
        )
