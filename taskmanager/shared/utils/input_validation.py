# taskmanager/shared/utils/input_validation.py

import re
from typing import Optional, Tuple

import regex

from taskmanager.shared.utils.messages_utils import get_message


class InputValidator:
    """
    Classe para validação de entradas de usuário.

    Valida e-mails, limites de senha (bcrypt só considera 72 bytes) e campos
    de texto livre como títulos de tarefas e comentários.
    """

    # ─────────────────────────────────────────────────────────────
    # Constantes de limites
    MIN_PASSWORD_LENGTH = 6
    MAX_PASSWORD_BYTES = 72  # Limite do bcrypt
    MAX_EMAIL_LENGTH = 255
    MAX_TITLE_LENGTH = 255
    MAX_COMMENT_LENGTH = 1000

    # ─────────────────────────────────────────────────────────────
    # Expressões Regulares para validações

    # E-mail (EMAIL_PATTERN):
    # - Aceita letras, números, pontos, underlines, hífens no usuário
    # - Aceita domínios com letras, números, pontos e hífens
    EMAIL_PATTERN = re.compile(
        r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"
    )

    # Caracteres de controle (CONTROL_CHARS_PATTERN):
    # - \p{Cc}: qualquer caractere de controle Unicode
    # - exceto tab, quebra de linha e retorno de carro
    CONTROL_CHARS_PATTERN = regex.compile(
        r"[^\P{Cc}\t\n\r]",
        flags=regex.UNICODE
    )

    # ─────────────────────────────────────────────────────────────

    @classmethod
    def validate_password(cls, password: str, language: str = "en") -> Tuple[bool, Optional[str]]:
        """
        Valida o tamanho de uma senha.

        Returns:
            (bool indicando se é válida, mensagem de erro se inválida)
        """
        if not password:
            return False, get_message("password_empty", language)
        if len(password) < cls.MIN_PASSWORD_LENGTH:
            return False, get_message("password_too_short", language, min=cls.MIN_PASSWORD_LENGTH)
        if len(password.encode("utf-8")) > cls.MAX_PASSWORD_BYTES:
            return False, get_message("password_too_long", language, max=cls.MAX_PASSWORD_BYTES)
        return True, None

    @classmethod
    def validate_email(cls, email: str, language: str = "en") -> Tuple[bool, Optional[str]]:
        if not email:
            return False, get_message("email_empty", language)

        if len(email) > cls.MAX_EMAIL_LENGTH:
            return False, get_message("email_too_long", language, max=cls.MAX_EMAIL_LENGTH)

        if not cls.EMAIL_PATTERN.match(email):
            return False, get_message("email_invalid", language)

        return True, None

    @classmethod
    def validate_text(cls, value: str, field: str, max_length: int,
                      language: str = "en") -> Tuple[bool, Optional[str]]:
        """Valida campos de texto livre: não vazio, tamanho máximo, sem caracteres de controle."""
        if not value or not value.strip():
            return False, get_message("field_empty", language, field=field)
        if len(value) > max_length:
            return False, get_message("field_too_long", language, field=field, max=max_length)
        if cls.CONTROL_CHARS_PATTERN.search(value):
            return False, get_message("field_control_chars", language, field=field)
        return True, None
