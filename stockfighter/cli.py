import argparse
import sys
from typing import List, Optional

from stockfighter.api.client import StockfighterClient
from stockfighter.config.manager import ConfigManager
from stockfighter.errors import StockfighterError
from stockfighter.logger import logger, setup_logger
from stockfighter.models import OrderDirection, OrderStatus, OrderType, format_cents


def _print_order(order: OrderStatus) -> None:
    state = "open" if order.open else "closed"
    direction = order.direction.value if order.direction else "?"
    order_type = order.order_type.value if order.order_type else "?"
    print(
        f"#{order.order_id} {direction} {order_type} {order.original_quantity} @ {format_cents(order.price)} "
        f"({state}, remaining {order.quantity}, filled {order.total_filled})"
    )
    for fill in order.fills:
        print(f"  fill {fill.quantity} @ {format_cents(fill.price)} {fill.timestamp or ''}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="stockfighter", description="Stockfighter API command line")
    parser.add_argument('--debug', action='store_true', help='Log requests at DEBUG level')
    sub = parser.add_subparsers(dest="cmd", required=True)

    ping = sub.add_parser("ping", help="Check the API, or a venue when given")
    ping.add_argument("venue", nargs="?")

    stocks = sub.add_parser("stocks", help="List stocks on a venue")
    stocks.add_argument("venue")

    book = sub.add_parser("orderbook", help="Show the orderbook for a stock")
    book.add_argument("venue")
    book.add_argument("stock")

    quote = sub.add_parser("quote", help="Show the latest quote for a stock")
    quote.add_argument("venue")
    quote.add_argument("stock")

    order = sub.add_parser("order", help="Place an order (price in cents)")
    order.add_argument("venue")
    order.add_argument("stock")
    order.add_argument("account")
    order.add_argument("price", type=int)
    order.add_argument("qty", type=int)
    order.add_argument("direction", choices=[d.value for d in OrderDirection])
    order.add_argument("--type", dest="order_type", default=OrderType.LIMIT.value,
                       choices=[t.value for t in OrderType])

    status = sub.add_parser("status", help="Show the status of an order")
    status.add_argument("venue")
    status.add_argument("stock")
    status.add_argument("order_id", type=int)

    cancel = sub.add_parser("cancel", help="Cancel an order")
    cancel.add_argument("venue")
    cancel.add_argument("stock")
    cancel.add_argument("order_id", type=int)

    orders = sub.add_parser("orders", help="List orders for an account")
    orders.add_argument("venue")
    orders.add_argument("account")
    orders.add_argument("--stock")

    return parser


def run(args: argparse.Namespace, client: StockfighterClient) -> None:
    if args.cmd == "ping":
        if args.venue:
            client.venue_heartbeat(args.venue)
            print(f"Venue {args.venue} is up")
        else:
            client.heartbeat()
            print("API is up")

    elif args.cmd == "stocks":
        for stock in client.list_stocks(args.venue):
            print(stock)

    elif args.cmd == "orderbook":
        book = client.get_orderbook(args.venue, args.stock)
        print(f"Orderbook {args.stock}@{args.venue} at {book.timestamp}")
        for entry in book.asks:
            print(f"  {entry}")
        for entry in book.bids:
            print(f"  {entry}")

    elif args.cmd == "quote":
        q = client.get_quote(args.venue, args.stock)
        print(f"Bid {format_cents(q.bid_price)} x {q.bid_size} (depth {q.bid_depth})")
        print(f"Ask {format_cents(q.ask_price)} x {q.ask_size} (depth {q.ask_depth})")
        print(f"Last {format_cents(q.last_price)} x {q.last_size} at {q.last_trade_time}")

    elif args.cmd == "order":
        _print_order(client.place_order(
            args.venue, args.stock, args.account, args.price, args.qty, args.direction, args.order_type
        ))

    elif args.cmd == "status":
        _print_order(client.get_order(args.venue, args.stock, args.order_id))

    elif args.cmd == "cancel":
        _print_order(client.cancel_order(args.venue, args.stock, args.order_id))

    elif args.cmd == "orders":
        if args.stock:
            found = client.get_stock_orders(args.venue, args.account, args.stock)
        else:
            found = client.get_all_orders(args.venue, args.account)
        for order in found:
            _print_order(order)
        print(f"{len(found)} order(s)")


def main(argv: Optional[List[str]] = None, client: Optional[StockfighterClient] = None) -> int:
    args = build_parser().parse_args(argv)

    config = ConfigManager()
    setup_logger(debug=args.debug or config.get('debug'))

    owned = client is None
    if owned:
        try:
            client = StockfighterClient.from_config(config)
        except ValueError as e:
            # Missing encryption key or undecryptable enc: API key
            logger.debug("configuration failed", exc_info=True)
            print(f"Error: {e}", file=sys.stderr)
            return 1

    try:
        run(args, client)
    except StockfighterError as e:
        logger.debug(f"{args.cmd} failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        if owned:
            client.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
