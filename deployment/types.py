import click

from deployment.constants import PoolType


class PoolTypeChoice(click.Choice):
    """Choice of pool types, converted to a PoolType member."""

    def __init__(self):
        super().__init__([pool_type.value for pool_type in PoolType])

    def convert(self, value, param, ctx):
        if isinstance(value, PoolType):
            return value
        return PoolType(super().convert(value, param, ctx))
