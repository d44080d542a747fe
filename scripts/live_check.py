# live_check.py
# Exercises every endpoint against the public TESTEX venue.
# Needs STOCKFIGHTER_API_KEY (env or .env). Places and cancels one order.
import argparse

from stockfighter.api.client import StockfighterClient
from stockfighter.errors import StockNotFound, VenueNotFound
from stockfighter.logger import setup_logger
from stockfighter.models import OrderDirection, OrderType

TEST_VENUE = "TESTEX"
TEST_STOCK = "FOOBAR"
TEST_ACCOUNT = "EXB123456"
MISSING = "NOEXIST"


def main(price: int, quantity: int):
    logger = setup_logger(debug=False)

    with StockfighterClient.from_config() as client:
        client.heartbeat()
        client.venue_heartbeat(TEST_VENUE)
        logger.info("API and venue are up")

        try:
            client.venue_heartbeat(MISSING)
        except VenueNotFound as e:
            logger.info(f"Expected: {e}")

        stocks = client.list_stocks(TEST_VENUE)
        logger.info(f"Stocks on {TEST_VENUE}: {', '.join(str(s) for s in stocks)}")

        book = client.get_orderbook(TEST_VENUE, TEST_STOCK)
        logger.info(f"Orderbook: {len(book.bids)} bids / {len(book.asks)} asks at {book.timestamp}")

        quote = client.get_quote(TEST_VENUE, TEST_STOCK)
        logger.info(f"Quote: bid {quote.bid_price} ask {quote.ask_price} last {quote.last_price}")

        try:
            client.get_quote(TEST_VENUE, MISSING)
        except StockNotFound as e:
            logger.info(f"Expected: {e}")

        for direction in (OrderDirection.BUY, OrderDirection.SELL):
            placed = client.place_order(
                TEST_VENUE, TEST_STOCK, TEST_ACCOUNT, price, quantity, direction, OrderType.LIMIT
            )
            logger.info(f"Placed #{placed.order_id}: open={placed.open} filled={placed.total_filled}")

            status = client.get_order(TEST_VENUE, TEST_STOCK, placed.order_id)
            assert status.order_id == placed.order_id

            cancelled = client.cancel_order(TEST_VENUE, TEST_STOCK, placed.order_id)
            logger.info(f"Cancelled #{cancelled.order_id}: open={cancelled.open}")

        orders = client.get_all_orders(TEST_VENUE, TEST_ACCOUNT)
        stock_orders = client.get_stock_orders(TEST_VENUE, TEST_ACCOUNT, TEST_STOCK)
        logger.info(f"Account has {len(orders)} orders, {len(stock_orders)} on {TEST_STOCK}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument('--price', type=int, default=5264, help='Limit price in cents')
    parser.add_argument('--qty', type=int, default=4625)
    args = parser.parse_args()
    main(args.price, args.qty)
