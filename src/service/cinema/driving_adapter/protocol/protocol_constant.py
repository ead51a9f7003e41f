"""Line protocol tokens. One request per line, fields separated by `|`."""

from enum import StrEnum


DELIMITER = '|'
SEAT_DELIMITER = ':'
SEAT_SEPARATOR = ','
LINE_TERMINATOR = '\n'
ENCODING = 'utf-8'

DATE_TIME_FORMAT = '%Y-%m-%d %H:%M'

GREETING = 'CONNECTED|Welcome to the Cinema Booking Server'

SUCCESS = 'SUCCESS'
ERROR = 'ERROR'
END_LIST = 'END_LIST'
END_SEATS = 'END_SEATS'

INTERNAL_ERROR_MESSAGE = 'Internal server error'
UNKNOWN_COMMAND_LABEL = 'UNKNOWN'


class Command(StrEnum):
    LOGIN = 'LOGIN'
    REGISTER = 'REGISTER'
    LOGOUT = 'LOGOUT'
    LIST_MOVIES = 'LIST_MOVIES'
    LIST_SHOWTIMES = 'LIST_SHOWTIMES'
    VIEW_SEATS = 'VIEW_SEATS'
    BOOK = 'BOOK'
    CANCEL = 'CANCEL'
    MY_BOOKINGS = 'MY_BOOKINGS'
    ADMIN_ADD_MOVIE = 'ADMIN_ADD_MOVIE'
    ADMIN_ADD_SHOWTIME = 'ADMIN_ADD_SHOWTIME'
    ADMIN_PROMOTE = 'ADMIN_PROMOTE'
    ADMIN_VIEW_ALL_BOOKINGS = 'ADMIN_VIEW_ALL_BOOKINGS'


class Access(StrEnum):
    PUBLIC = 'public'
    AUTHENTICATED = 'authenticated'
    ADMIN = 'admin'


COMMAND_ACCESS: dict[Command, Access] = {
    Command.LOGIN: Access.PUBLIC,
    Command.REGISTER: Access.PUBLIC,
    Command.LOGOUT: Access.PUBLIC,
    Command.LIST_MOVIES: Access.PUBLIC,
    Command.LIST_SHOWTIMES: Access.PUBLIC,
    Command.VIEW_SEATS: Access.PUBLIC,
    Command.BOOK: Access.AUTHENTICATED,
    Command.CANCEL: Access.AUTHENTICATED,
    Command.MY_BOOKINGS: Access.AUTHENTICATED,
    Command.ADMIN_ADD_MOVIE: Access.ADMIN,
    Command.ADMIN_ADD_SHOWTIME: Access.ADMIN,
    Command.ADMIN_PROMOTE: Access.ADMIN,
    Command.ADMIN_VIEW_ALL_BOOKINGS: Access.ADMIN,
}
