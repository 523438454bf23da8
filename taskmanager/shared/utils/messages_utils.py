# taskmanager/shared/utils/messages_utils.py

"""
Sistema de mensagens multilíngue para validação de entrada.

Este módulo fornece suporte a tradução das mensagens de validação
em diferentes idiomas (i18n). O idioma padrão da API é o inglês.
"""

from typing import Dict

# chave -> {idioma: modelo}
MESSAGES: Dict[str, Dict[str, str]] = {
    # Password validation
    "password_empty": {
        "pt": "Senha não pode estar vazia.",
        "en": "Password cannot be empty."
    },
    "password_too_short": {
        "pt": "Senha deve ter pelo menos {min} caracteres.",
        "en": "Password must be at least {min} characters long."
    },
    "password_too_long": {
        "pt": "Senha é muito longa (máximo {max} bytes).",
        "en": "Password is too long (maximum {max} bytes)."
    },

    # Email validation
    "email_invalid": {
        "pt": "Formato de e-mail inválido.",
        "en": "Invalid email format."
    },
    "email_too_long": {
        "pt": "E-mail é muito longo (máximo {max} caracteres).",
        "en": "Email is too long (maximum {max} characters)."
    },
    "email_empty": {
        "pt": "E-mail não pode estar vazio.",
        "en": "Email cannot be empty."
    },

    # Generic text fields
    "field_empty": {
        "pt": "Campo '{field}' não pode estar vazio.",
        "en": "{field} is required."
    },
    "field_too_long": {
        "pt": "Campo '{field}' excede o tamanho máximo de {max} caracteres.",
        "en": "{field} cannot exceed {max} characters."
    },
    "field_control_chars": {
        "pt": "Campo '{field}' contém caracteres de controle.",
        "en": "{field} contains control characters."
    },
}

DEFAULT_LANGUAGE = "en"


def get_message(key: str, language: str = DEFAULT_LANGUAGE, **kwargs) -> str:
    """
    Devolve a mensagem `key` no idioma pedido, interpolando `kwargs`.

    Idiomas sem tradução caem para o inglês; chaves desconhecidas viram um
    marcador visível em vez de levantar erro.
    """
    translations = MESSAGES.get(key)
    if translations is None:
        return f"[Message not found: {key}]"
    template = translations.get(language) or translations[DEFAULT_LANGUAGE]
    return template.format(**kwargs)
