## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘


class ForthError(Exception):
    fatal = False

    def __init__(self, message: str = "", *, forth_word=None, forth_token=None, forth_column=None):
        """Base class for all Forth-raised errors."""
        super().__init__(message)
        self.forth_word: object = forth_word
        self.forth_token: str = forth_token
        self.forth_column: int = forth_column

class ForthFatalError(ForthError):
    """Errors that end the session when running from the command-line."""
    fatal = True


class ForthStackError(ForthFatalError):
    def __init__(self, message: str = "", *, forth_stack=None, **kwargs):
        super().__init__(message, **kwargs)
        self.forth_stack: str = forth_stack

class ForthStackOverflow(ForthStackError, OverflowError):
    pass

class ForthStackUnderflow(ForthStackError, IndexError):
    pass

class ForthDivideByZero(ForthFatalError, ZeroDivisionError):
    pass


class ForthUnknownWord(ForthError, NameError):
    pass

class ForthMissingName(ForthError, ValueError):
    pass

class ForthUnexpectedSemicolon(ForthError, RuntimeError):
    pass


class ForthTypeMissing(ForthError, TypeError):
    """Python operations must annotate their stack effects to be registered."""
    pass
