"""
ClassHub Backend — Bearer Token Decoding Tests
================================================

What:  decode_identity accepts tokens signed with the configured secret and
       carrying `sub` + `type`; everything else yields None.
"""

import time
import uuid

import jwt

from classhub.config import settings
from classhub.security import decode_identity


class TestDecodeIdentity:

    def test_valid_token(self, make_token):
        teacher_id = uuid.uuid4()
        identity = decode_identity(make_token(teacher_id, "teacher"))
        assert identity is not None
        assert identity.id == str(teacher_id)
        assert identity.type == "teacher"

    def test_wrong_secret(self, make_token):
        token = make_token(uuid.uuid4(), "student", secret="another-secret-0123456789abcdefghij")
        assert decode_identity(token) is None

    def test_garbage_token(self):
        assert decode_identity("not.a.jwt") is None

    def test_expired_token(self):
        token = jwt.encode(
            {"sub": str(uuid.uuid4()), "type": "teacher", "exp": int(time.time()) - 60},
            settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
        )
        assert decode_identity(token) is None

    def test_missing_type_claim(self):
        token = jwt.encode({"sub": str(uuid.uuid4())}, settings.jwt_secret, algorithm=settings.jwt_algorithm)
        assert decode_identity(token) is None
