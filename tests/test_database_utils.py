from types import SimpleNamespace

from sqlalchemy.exc import IntegrityError

from utils.database_utils import DatabaseUtils

ENROLLMENT_COLUMNS = ("user_challenges.user_id", "user_challenges.challenge_id")


class PgError(Exception):
    def __init__(self, message, constraint_name):
        super().__init__(message)
        self.diag = SimpleNamespace(constraint_name=constraint_name)


def integrity_error(orig):
    return IntegrityError("INSERT INTO user_challenges ...", {}, orig)


def test_postgres_constraint_name_decides():
    duplicate = integrity_error(PgError("duplicate key value", "uq_user_challenge"))
    missing_user = integrity_error(PgError("violates foreign key constraint", "user_challenges_user_id_fkey"))

    assert DatabaseUtils.is_unique_violation(duplicate, "uq_user_challenge", ENROLLMENT_COLUMNS)
    assert not DatabaseUtils.is_unique_violation(missing_user, "uq_user_challenge", ENROLLMENT_COLUMNS)


def test_sqlite_message_is_matched_on_columns():
    duplicate = integrity_error(Exception(
        "UNIQUE constraint failed: user_challenges.user_id, user_challenges.challenge_id"
    ))
    other_unique = integrity_error(Exception("UNIQUE constraint failed: users.email"))
    check = integrity_error(Exception("CHECK constraint failed: ck_enrollment_points"))

    assert DatabaseUtils.is_unique_violation(duplicate, "uq_user_challenge", ENROLLMENT_COLUMNS)
    assert not DatabaseUtils.is_unique_violation(other_unique, "uq_user_challenge", ENROLLMENT_COLUMNS)
    assert not DatabaseUtils.is_unique_violation(check, "uq_user_challenge", ENROLLMENT_COLUMNS)


def test_foreign_key_message_without_diag_is_not_a_duplicate():
    error = integrity_error(Exception(
        'insert or update on table "user_challenges" violates foreign key constraint '
        '"user_challenges_user_id_fkey"'
    ))

    assert not DatabaseUtils.is_unique_violation(error, "uq_user_challenge", ENROLLMENT_COLUMNS)
