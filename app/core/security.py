import hashlib
import hmac


def get_password_hash(password: str) -> str:
    """
    Hash MD5 en hexadecimal, compatible con las contraseñas ya almacenadas.

    Un solo MD5 sin sal no es un hash de contraseñas aceptable; se mantiene
    únicamente para no invalidar las credenciales existentes.
    """
    return hashlib.md5(password.encode("utf-8")).hexdigest()


def verify_password(plain_password: str, hashed_password: str) -> bool:
    if not hashed_password:
        return False
    return hmac.compare_digest(get_password_hash(plain_password), hashed_password)
