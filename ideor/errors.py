# Error taxonomy shared by the prompt builder, normalizer, Gemini client and services
# Every error carries the HTTP status the API layer should answer with


class IdeorError(Exception):
    """Base class for errors surfaced to API callers."""
    status_code = 500
    message = "Erro interno"

    def __init__(self, detail: str = ""):
        super().__init__(detail or self.message)
        self.detail = detail or self.message


class UnknownStageError(IdeorError):
    status_code = 400
    message = "Etapa não reconhecida"

    def __init__(self, stage):
        super().__init__(f"Stage '{stage}' não reconhecido")
        self.stage = stage


class AuthenticationError(IdeorError):
    status_code = 401
    message = "Não autenticado"


class AuthUnavailableError(IdeorError):
    """Raised when the Firebase Admin SDK cannot be initialized."""
    status_code = 503
    message = "Autenticação indisponível"


class ValidationFailedError(IdeorError):
    status_code = 400
    message = "Requisição inválida"


class UpstreamUnparseableError(IdeorError):
    """Raised when no idea could be recovered from the model output."""
    status_code = 502
    message = "Resposta do modelo não pôde ser interpretada"


# Zero usable entries after every fallback strategy
EmptyResultError = UpstreamUnparseableError


class InsufficientResultsError(IdeorError):
    status_code = 502
    message = "O modelo não retornou ideias suficientes"

    def __init__(self, expected: int, received: int):
        super().__init__(f"expected {expected} ideas, received {received}")
        self.expected = expected
        self.received = received


class UpstreamError(IdeorError):
    """Transport, timeout or API failure while calling Gemini."""
    status_code = 502
    message = "Falha ao comunicar com o Gemini"

    def __init__(self, detail: str = "", retryable: bool = False, status_code: int = None):
        super().__init__(detail)
        self.retryable = retryable
        if status_code is not None:
            self.status_code = status_code
