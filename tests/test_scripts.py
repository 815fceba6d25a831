"""Tests for the CLI entrypoints: say_hello and create_user."""

import io
import os
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from unittest.mock import MagicMock

from sessionauth.core.config import Settings
from sessionauth.core.database import build_engine, build_session_factory
from sessionauth.core.security import verify_password
from sessionauth.models import Base
from sessionauth.scripts import create_user, say_hello
from sessionauth.stores.sql import SqlCredentialStore


class TestGreeting(unittest.TestCase):
    """Age brackets: under 13, 13 to 49, 50 and over."""

    def test_young(self) -> None:
        self.assertEqual(say_hello.greeting("Tim", 12), "Hello Tim, you're still rather young!")

    def test_prime(self) -> None:
        self.assertEqual(say_hello.greeting("Ann", 13), "Hello Ann, you're in the prime of your life!")
        self.assertEqual(say_hello.greeting("Ann", 49), "Hello Ann, you're in the prime of your life!")

    def test_older(self) -> None:
        self.assertEqual(
            say_hello.greeting("Bob", 50),
            "Hello Bob, getting up there in age, huh? Well, you're only as young as you feel!",
        )


class TestSayHelloMain(unittest.TestCase):
    def test_options_from_flags(self) -> None:
        ask = MagicMock()
        out = io.StringIO()
        with redirect_stdout(out):
            code = say_hello.main(["-n", "Tim", "-a", "8"], ask=ask)
        self.assertEqual(code, 0)
        self.assertEqual(out.getvalue().strip(), "Hello Tim, you're still rather young!")
        ask.assert_not_called()

    def test_missing_options_are_asked(self) -> None:
        ask = MagicMock(side_effect=["Ann", "30"])
        out = io.StringIO()
        with redirect_stdout(out):
            code = say_hello.main([], ask=ask)
        self.assertEqual(code, 0)
        self.assertEqual(out.getvalue().strip(), "Hello Ann, you're in the prime of your life!")
        self.assertEqual(ask.call_args_list[0].args[0], "What is your name? ")
        self.assertEqual(ask.call_args_list[1].args[0], "How old are you? ")

    def test_non_numeric_age_exits_2(self) -> None:
        with redirect_stderr(io.StringIO()), self.assertRaises(SystemExit) as ctx:
            say_hello.main(["-n", "Tim", "-a", "old"])
        self.assertEqual(ctx.exception.code, 2)


class TestCreateUser(unittest.TestCase):
    def setUp(self) -> None:
        self.tmpdir = tempfile.TemporaryDirectory()
        self.url = f"sqlite:///{os.path.join(self.tmpdir.name, 'users.db')}"
        self.engine = build_engine(self.url)
        Base.metadata.create_all(bind=self.engine)
        self.settings = Settings(_env_file=None, DATABASE_URL=self.url, BCRYPT_ROUNDS=4)

    def tearDown(self) -> None:
        self.engine.dispose()
        self.tmpdir.cleanup()

    def test_creates_admin(self) -> None:
        code = create_user.main(["boss@x.com", "Passw0rd!", "admin", "--first-name", "Joe"], settings=self.settings)
        self.assertEqual(code, 0)
        record = SqlCredentialStore(build_session_factory(self.engine)).find_by_email("boss@x.com")
        self.assertEqual(record.role, "admin")
        self.assertEqual(record.first_name, "Joe")
        self.assertTrue(verify_password("Passw0rd!", record.password_hash))

    def test_duplicate_email_fails(self) -> None:
        self.assertEqual(create_user.main(["a@x.com", "P1"], settings=self.settings), 0)
        err = io.StringIO()
        with redirect_stderr(err):
            code = create_user.main(["a@x.com", "P2"], settings=self.settings)
        self.assertEqual(code, 1)
        self.assertIn("unique", err.getvalue())

    def test_requires_database_url(self) -> None:
        err = io.StringIO()
        with redirect_stderr(err):
            code = create_user.main(["a@x.com", "P1"], settings=Settings(_env_file=None, DATABASE_URL=None))
        self.assertEqual(code, 1)
        self.assertIn("DATABASE_URL", err.getvalue())


if __name__ == "__main__":
    unittest.main()
