"""
Failure taxonomy for a single conversion.

Every failure carries a stable ``kind`` (used by the HTTP layer to pick a
status code) and a human-readable message shown to whoever submitted the file.
"""

from __future__ import annotations


class ConversionError(Exception):
    kind = "ConversionError"
    default_message = "Falha ao converter o arquivo."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class MissingField(ConversionError):
    kind = "MissingField"
    default_message = "Todos os campos são obrigatórios."


class InvalidFileType(ConversionError):
    kind = "InvalidFileType"
    default_message = "Por favor, selecione um arquivo .csv válido."


class InvalidLocation(ConversionError):
    kind = "InvalidLocation"
    default_message = "Local da coleta inválido."


class EmptyOrInvalidInput(ConversionError):
    kind = "EmptyOrInvalidInput"
    default_message = "O arquivo CSV está vazio ou é inválido."


class InvalidDateFormat(ConversionError):
    kind = "InvalidDateFormat"
    default_message = "Formato de data inválido. Use o seletor de data."


class NoDataRows(ConversionError):
    kind = "NoDataRows"
    default_message = "O CSV não contém linhas de dados para processar."


class ParseFailure(ConversionError):
    kind = "ParseFailure"
    default_message = "Falha ao ler o arquivo CSV. Verifique se o formato está correto."


class ProcessingFailure(ConversionError):
    kind = "ProcessingFailure"
    default_message = "Ocorreu um erro ao processar o arquivo."


class EncodingFailure(ConversionError):
    kind = "EncodingFailure"
    default_message = "Ocorreu um erro ao gerar a planilha."
