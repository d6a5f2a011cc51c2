# engine/errors.py

class ForecastError(Exception):
    pass


class InvalidSeriesError(ForecastError):
    pass


class ChannelNotFoundError(ForecastError):
    pass


class InsufficientDataError(ForecastError):
    pass


class InvalidRequestError(ForecastError):
    pass
