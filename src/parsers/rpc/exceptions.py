class RpcError(Exception):
    pass


class LookupFailure(RpcError):
    pass


class AccountNotFound(RpcError):
    pass


class InvalidAddress(ValueError):
    pass


class ParseFailure(ValueError):
    pass
