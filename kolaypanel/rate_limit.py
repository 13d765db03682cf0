"""
Rate limiting yapilandirmasi (slowapi).

Global limit tum endpoint'lere uygulanir. Kimlik dogrulama ve fatura
kaydetme gibi hassas endpoint'ler kendi daha siki limitlerini kullanir.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

# Kayit ve giris denemeleri (brute-force korumasi)
REGISTER_LIMIT = "5/minute"
LOGIN_LIMIT = "10/minute"

# Fatura kaydetme: cift tiklama / tekrar gonderim firtinasini sinirla
INVOICE_SUBMIT_LIMIT = "30/minute"

# Client IP bazli rate limiter, global limit: dakikada 120 istek
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["120/minute"],
)
