# core/exceptions.py

"""
Author:
These are the errors the service functions raise when an
operation is rejected. Each one carries the HTTP status the JSON
views answer with, so the services never have to know about
requests or responses.
"""


class SupportError(Exception):
    status_code = 400
    default_message = 'Request could not be completed'

    def __init__(self, message=None, details=None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def as_dict(self):
        payload = {'error': self.message}
        if self.details:
            payload['details'] = self.details
        return payload


class ValidationFailed(SupportError):
    status_code = 400
    default_message = 'Validation error'


class Forbidden(SupportError):
    status_code = 403
    default_message = 'Access denied'


class NotFound(SupportError):
    status_code = 404
    default_message = 'Not found'


class Conflict(SupportError):
    status_code = 409
    default_message = 'Conflict'
