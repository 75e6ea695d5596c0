#!/usr/bin/env python3
"""
Checkout saga - reserve stock, charge the card, pick a shipping method.

Runs the same pipeline twice: once with enough balance (everything
commits) and once without (the stock reservation is released again).
"""

import logging

from compensate import Command, CommandContext, Pipeline, compose, cond


class OrderContext(CommandContext):
    sku: str
    balance: int
    express: bool = False
    reserved: bool = False
    charged: int = 0
    shipping: str = ""


class ReserveStock(Command):
    def execute(self):
        self.context.reserved = True

    def undo(self):
        self.context.reserved = False


class ChargeCard(Command):
    price = 30

    def execute(self):
        if self.context.balance < self.price:
            self.context.success = False
            return
        self.context.balance -= self.price
        self.context.charged = self.price

    def undo(self):
        self.context.balance += self.context.charged
        self.context.charged = 0


class ExpressShipping(Command):
    def execute(self):
        self.context.shipping = "express"


class StandardShipping(Command):
    def execute(self):
        self.context.shipping = "standard"


checkout = Pipeline(
    [
        compose(ReserveStock, ChargeCard),
        cond(lambda ctx: ExpressShipping if ctx.express else StandardShipping),
    ]
)


def main():
    logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    ok = checkout(OrderContext(sku="book-42", balance=100, express=True))
    print(f"paid:   success={ok.success} reserved={ok.reserved} "
          f"balance={ok.balance} shipping={ok.shipping!r}")

    broke = checkout(OrderContext(sku="book-42", balance=10))
    print(f"broke:  success={broke.success} reserved={broke.reserved} "
          f"balance={broke.balance} shipping={broke.shipping!r}")


if __name__ == "__main__":
    main()
