from datetime import date
from enum import StrEnum


class Weekday(StrEnum):
    MONDAY = 'MONDAY'
    TUESDAY = 'TUESDAY'
    WEDNESDAY = 'WEDNESDAY'
    THURSDAY = 'THURSDAY'
    FRIDAY = 'FRIDAY'
    SATURDAY = 'SATURDAY'
    SUNDAY = 'SUNDAY'

    @classmethod
    def of(cls, day: date) -> 'Weekday':
        # date.weekday(): Monday == 0, member order matches
        return list(cls)[day.weekday()]

    @classmethod
    def parse(cls, token: str) -> 'Weekday':
        """Accept any casing ('monday', 'Monday', 'MONDAY')"""
        try:
            return cls(token.strip().upper())
        except ValueError:
            raise ValueError(f'Invalid weekday value: {token!r}')
