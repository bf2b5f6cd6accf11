class QrCafeError(Exception):
    """
    Базовая ошибка приложения.
    status_code — код, которым отвечает HTTP-слой.
    """

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(QrCafeError):
    """Не хватает обязательного поля или значение некорректно (400). Не ретраится."""

    status_code = 400


class NotFoundError(QrCafeError):
    """Кафе, позиция меню или заказ не найдены (404)."""

    status_code = 404


class StoreFailure(QrCafeError):
    """Ошибка самого хранилища (500)."""

    status_code = 500
