class CorpusFormatError(ValueError):
    """
    Структурно испорченная запись, которую нельзя обработать.
    Прерывает обработку всего корпуса.
    """

    def __init__(self, key: str, message: str):
        self.key = key
        super().__init__(f"[{key}] {message}")


class UnknownFormatError(KeyError):
    """Формат с таким именем не зарегистрирован."""

    def __str__(self):
        return str(self.args[0]) if self.args else ""
