"""User-facing message catalogs.

Messages are looked up by dotted key (``"validation.networkError"``).
Unknown languages fall back to English, unknown keys to the key itself.
"""

from __future__ import annotations

from collections.abc import Mapping

_EN: dict[str, str] = {
    # Request failures
    "validation.unknownError": "An unknown error occurred.",
    "validation.invalidData": "Invalid data. Please review the fields.",
    "validation.noPermission": "You do not have permission to perform this action.",
    "validation.notFound": "Record not found.",
    "validation.duplicate": "This record already exists.",
    "validation.serverError": "Server error. Please try again later.",
    "validation.networkError": "Network error. Check your connection.",
    "validation.failed": "Please fix the highlighted fields.",
    "validation.unexpectedResponse": "Unexpected response from the server.",
    # Login
    "auth.loginError": "Could not sign in.",
    "auth.invalidCredentials": "Invalid email or password.",
    "auth.validateEmailError": "Please check the email address.",
    "auth.serverResponseError": "Unexpected response from the server.",
    "auth.emailRequired": "Email and password are required.",
    "auth.invalidEmail": "Enter a valid email address.",
    # Coordinates
    "validation.latitudeRequired": "Latitude is required.",
    "validation.latitudeInvalid": "Latitude must be a number.",
    "validation.latitudeRange": "Latitude must be between -90 and 90.",
    "validation.longitudeRequired": "Longitude is required.",
    "validation.longitudeInvalid": "Longitude must be a number.",
    "validation.longitudeRange": "Longitude must be between -180 and 180.",
    # Users
    "user.nameRequired": "Name is required.",
    "user.nameMinLength": "Name must have at least 3 characters.",
    "user.emailRequired": "Email is required.",
    "user.emailInvalid": "Invalid email.",
    "user.passwordRequired": "Password is required.",
    "user.passwordMinLength": "Password must have at least 6 characters.",
    # Yards
    "yard.userRequired": "User is required.",
    "yard.cepRequired": "CEP is required.",
    "yard.cepInvalid": "CEP must have 8 digits.",
    "yard.numberRequired": "Number is required.",
    "yard.cityRequired": "City is required.",
    "yard.cityMinLength": "City must have at least 2 characters.",
    "yard.stateRequired": "State is required.",
    "yard.stateInvalid": "State must have 2 letters.",
    "yard.capacityRequired": "Capacity is required.",
    "yard.capacityInvalid": "Capacity must be a number.",
    "yard.capacityMinValue": "Capacity cannot be negative.",
    # Motorcycles
    "motorcycle.statusRequired": "Status is required.",
    "motorcycle.yardRequired": "Yard is required.",
    "motorcycle.plateRequired": "Plate is required.",
    "motorcycle.plateMinLength": "Plate must have at least 7 characters.",
    "motorcycle.chassisRequired": "Chassis is required.",
    "motorcycle.chassisMinLength": "Chassis must have at least 17 characters.",
    "motorcycle.engineNumberRequired": "Engine number is required.",
    "motorcycle.engineNumberMinLength": "Engine number must have at least 5 characters.",
    "motorcycle.modelRequired": "Model is required.",
    "motorcycle.modelMinLength": "Model must have at least 2 characters.",
    "motorcycle.tagRequired": "Tag is required.",
    # Antennas
    "antenna.yardRequired": "Yard is required.",
    "antenna.codeRequired": "Code is required.",
    "antenna.codeMinLength": "Code must have at least 3 characters.",
    # Tags
    "tag.rfidRequired": "RFID code is required.",
    "tag.rfidMinLength": "RFID code must have at least 5 characters.",
    "tag.ssidRequired": "SSID is required.",
    "tag.ssidMinLength": "SSID must have at least 2 characters.",
}

_PT_BR: dict[str, str] = {
    "validation.unknownError": "Ocorreu um erro desconhecido.",
    "validation.invalidData": "Dados inválidos. Verifique os campos.",
    "validation.noPermission": "Você não tem permissão para realizar esta ação.",
    "validation.notFound": "Registro não encontrado.",
    "validation.duplicate": "Este registro já existe.",
    "validation.serverError": "Erro no servidor. Tente novamente mais tarde.",
    "validation.networkError": "Erro de rede. Verifique sua conexão.",
    "validation.failed": "Corrija os campos destacados.",
    "validation.unexpectedResponse": "Resposta inesperada do servidor.",
    "auth.loginError": "Não foi possível entrar.",
    "auth.invalidCredentials": "Email ou senha inválidos.",
    "auth.validateEmailError": "Verifique o endereço de email.",
    "auth.serverResponseError": "Resposta inesperada do servidor.",
    "auth.emailRequired": "Email e senha são obrigatórios.",
    "auth.invalidEmail": "Informe um email válido.",
    "validation.latitudeRequired": "Latitude é obrigatória.",
    "validation.latitudeInvalid": "Latitude deve ser um número.",
    "validation.latitudeRange": "Latitude deve estar entre -90 e 90.",
    "validation.longitudeRequired": "Longitude é obrigatória.",
    "validation.longitudeInvalid": "Longitude deve ser um número.",
    "validation.longitudeRange": "Longitude deve estar entre -180 e 180.",
    "user.nameRequired": "Nome é obrigatório.",
    "user.nameMinLength": "Nome deve ter pelo menos 3 caracteres.",
    "user.emailRequired": "Email é obrigatório.",
    "user.emailInvalid": "Email inválido.",
    "user.passwordRequired": "Senha é obrigatória.",
    "user.passwordMinLength": "Senha deve ter pelo menos 6 caracteres.",
    "yard.userRequired": "Usuário é obrigatório.",
    "yard.cepRequired": "CEP é obrigatório.",
    "yard.cepInvalid": "CEP deve ter 8 dígitos.",
    "yard.numberRequired": "Número é obrigatório.",
    "yard.cityRequired": "Cidade é obrigatória.",
    "yard.cityMinLength": "Cidade deve ter pelo menos 2 caracteres.",
    "yard.stateRequired": "Estado é obrigatório.",
    "yard.stateInvalid": "Estado deve ter 2 letras.",
    "yard.capacityRequired": "Capacidade é obrigatória.",
    "yard.capacityInvalid": "Capacidade deve ser um número.",
    "yard.capacityMinValue": "Capacidade não pode ser negativa.",
    "motorcycle.statusRequired": "Status é obrigatório.",
    "motorcycle.yardRequired": "Pátio é obrigatório.",
    "motorcycle.plateRequired": "Placa é obrigatória.",
    "motorcycle.plateMinLength": "Placa deve ter pelo menos 7 caracteres.",
    "motorcycle.chassisRequired": "Chassi é obrigatório.",
    "motorcycle.chassisMinLength": "Chassi deve ter pelo menos 17 caracteres.",
    "motorcycle.engineNumberRequired": "Número do motor é obrigatório.",
    "motorcycle.engineNumberMinLength": "Número do motor deve ter pelo menos 5 caracteres.",
    "motorcycle.modelRequired": "Modelo é obrigatório.",
    "motorcycle.modelMinLength": "Modelo deve ter pelo menos 2 caracteres.",
    "motorcycle.tagRequired": "Tag é obrigatória.",
    "antenna.yardRequired": "Pátio é obrigatório.",
    "antenna.codeRequired": "Código é obrigatório.",
    "antenna.codeMinLength": "Código deve ter pelo menos 3 caracteres.",
    "tag.rfidRequired": "Código RFID é obrigatório.",
    "tag.rfidMinLength": "Código RFID deve ter pelo menos 5 caracteres.",
    "tag.ssidRequired": "SSID é obrigatório.",
    "tag.ssidMinLength": "SSID deve ter pelo menos 2 caracteres.",
}

CATALOGS: Mapping[str, Mapping[str, str]] = {"en": _EN, "pt-BR": _PT_BR}
SUPPORTED_LANGUAGES: tuple[str, ...] = tuple(CATALOGS)


class Translator:
    """Resolve message keys for one language."""

    def __init__(self, language: str = "en") -> None:
        self.language = language if language in CATALOGS else "en"
        self._catalog = CATALOGS[self.language]

    def t(self, key: str) -> str:
        message = self._catalog.get(key)
        if message is None:
            message = _EN.get(key, key)
        return message

    __call__ = t


DEFAULT_TRANSLATOR = Translator()
