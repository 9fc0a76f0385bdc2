#!/usr/bin/env python3
# inventory.py

"""
A small product inventory tracker for the terminal.

Features
--------
* Add products (id, name, price, quantity)
* View, search and update stock levels
* Low-stock alerts
* Save / load to a comma-delimited text file
* Interactive command-line menu
"""

import logging
import math
import os
import re
import sys
from dataclasses import dataclass, replace
from typing import Iterator, List, Optional, Tuple


DATA_FILE = "inventory.txt"
CHART_FILE = "stock_levels.png"
LOW_STOCK_THRESHOLD = 5  # items below this quantity will be flagged
DELIMITER = ","

# Fields in the data file must be plain ASCII numbers, no padding or "_"
INT_FIELD = re.compile(r"-?[0-9]+")
PRICE_FIELD = re.compile(r"-?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][-+]?[0-9]+)?")

logger = logging.getLogger(__name__)


# ------------------------------------------------------------------------- #
#  Errors
# ------------------------------------------------------------------------- #
class InventoryError(Exception):
    """Base class for every failure reported by the inventory."""


class DuplicateIdError(InventoryError):
    def __init__(self, product_id: int) -> None:
        super().__init__(f"Product with ID {product_id} already exists.")
        self.product_id = product_id


class InvalidFieldError(InventoryError, ValueError):
    pass


class NotFoundError(InventoryError, LookupError):
    def __init__(self, product_id: int) -> None:
        super().__init__(f"Product with ID {product_id} not found.")
        self.product_id = product_id


class StorageError(InventoryError):
    pass


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_quantity(quantity: int) -> None:
    if not _is_int(quantity):
        raise InvalidFieldError("Quantity must be a whole number.")
    if quantity < 0:
        raise InvalidFieldError("Quantity cannot be negative.")


def validate_fields(name: str, price: float, quantity: int) -> None:
    """Raise InvalidFieldError unless the values make a valid product."""
    if not isinstance(name, str) or not name.strip():
        raise InvalidFieldError("Product name cannot be empty.")
    if isinstance(price, bool) or not isinstance(price, (int, float)):
        raise InvalidFieldError("Price must be a number.")
    if not math.isfinite(price):
        raise InvalidFieldError("Price must be a finite number.")
    if price < 0:
        raise InvalidFieldError("Price cannot be negative.")
    validate_quantity(quantity)


# ------------------------------------------------------------------------- #
#  Data model
# ------------------------------------------------------------------------- #
@dataclass(frozen=True)
class Product:
    """
    A single inventory line-item.

    Instances are immutable; stock changes go through Inventory.update_quantity.
    """
    id: int          # Externally assigned, unique within an Inventory
    name: str        # Human-readable description
    price: float     # Unit price
    quantity: int    # Units on hand

    def encode(self) -> str:
        """
        Return the one-line file representation: ``id,name,price,quantity``.

        The delimiter is not escaped, so a name containing a comma will not
        survive a later decode.
        """
        return DELIMITER.join(
            (str(self.id), self.name, repr(float(self.price)), str(self.quantity))
        )

    @classmethod
    def decode(cls, line: str) -> Optional["Product"]:
        """Parse one file line. Returns None if the line is malformed."""
        fields = line.rstrip("\r\n").split(DELIMITER, 3)
        if len(fields) < 4:
            return None
        raw_id, name, raw_price, raw_qty = fields
        if not (INT_FIELD.fullmatch(raw_id)
                and PRICE_FIELD.fullmatch(raw_price)
                and INT_FIELD.fullmatch(raw_qty)):
            return None
        try:
            product_id = int(raw_id)
            price = float(raw_price)
            quantity = int(raw_qty)
        except ValueError:  # digit strings past the int conversion limit
            return None
        try:
            validate_fields(name, price, quantity)
        except InvalidFieldError:
            return None
        return cls(id=product_id, name=name, price=price, quantity=quantity)


@dataclass(frozen=True)
class LoadResult:
    """Outcome of Inventory.load."""
    loaded: int = 0
    skipped: int = 0
    missing: bool = False   # True when the data file did not exist
    duplicates: int = 0     # Lines rejected for a repeated id (included in skipped)


class Inventory:
    """
    Core inventory container – holds Products in insertion order.
    """

    def __init__(self) -> None:
        self._products: List[Product] = []

    # --------------------------------------------------------------------- #
    #  Public API
    # --------------------------------------------------------------------- #
    def add(self, product_id: int, name: str, price: float, quantity: int) -> Product:
        """
        Append a new product.

        Raises DuplicateIdError if the id is taken and InvalidFieldError for an
        empty name, a negative price, a non-integer id or a negative or
        non-integer quantity.
        """
        if not _is_int(product_id):
            raise InvalidFieldError("Product ID must be a whole number.")
        if self._index_of(product_id) is not None:
            raise DuplicateIdError(product_id)
        validate_fields(name, price, quantity)
        product = Product(id=product_id, name=name, price=float(price), quantity=quantity)
        self._products.append(product)
        logger.debug("Added product %s (%r)", product_id, name)
        return product

    def find_by_id(self, product_id: int) -> Optional[Product]:
        """Return the Product with `product_id` or None if not present."""
        index = self._index_of(product_id)
        return None if index is None else self._products[index]

    def update_quantity(self, product_id: int, new_quantity: int) -> Product:
        """Overwrite the stock level of an existing product, keeping its position."""
        index = self._index_of(product_id)
        if index is None:
            raise NotFoundError(product_id)
        validate_quantity(new_quantity)
        updated = replace(self._products[index], quantity=new_quantity)
        self._products[index] = updated
        logger.debug("Product %s quantity set to %s", product_id, new_quantity)
        return updated

    def list_products(self) -> Tuple[Product, ...]:
        """Return a read-only snapshot in insertion order."""
        return tuple(self._products)

    def low_stock(self, threshold: int = LOW_STOCK_THRESHOLD) -> Tuple[Product, ...]:
        """Return products whose quantity is < threshold, in insertion order."""
        return tuple(p for p in self._products if p.quantity < threshold)

    def total_value(self) -> float:
        """Sum of price * quantity across all products."""
        return round(sum(p.price * p.quantity for p in self._products), 2)

    def __len__(self) -> int:
        return len(self._products)

    def __iter__(self) -> Iterator[Product]:
        return iter(self.list_products())

    def _index_of(self, product_id: int) -> Optional[int]:
        for index, product in enumerate(self._products):
            if product.id == product_id:
                return index
        return None

    # --------------------------------------------------------------------- #
    #  Persistence helpers
    # --------------------------------------------------------------------- #
    def save(self, path: str = DATA_FILE) -> int:
        """
        Write one encoded line per product, replacing the file's contents.

        The write is not atomic: a crash part-way through can leave a
        truncated file behind. Returns the number of products written.
        """
        try:
            with open(path, "w", encoding="utf-8") as f:
                for product in self._products:
                    f.write(product.encode() + "\n")
        except OSError as e:
            logger.warning("Could not save inventory to %s: %s", path, e)
            raise StorageError(f"Unable to save data to '{path}': {e}") from e
        return len(self._products)

    def load(self, path: str = DATA_FILE) -> LoadResult:
        """
        Replace the current products with the contents of `path`.

        A missing file empties the inventory and is reported through
        ``LoadResult.missing``. Malformed lines and lines repeating an id
        already seen in the file are skipped, as are lines that are not valid
        UTF-8. Only empty lines are ignored, so ``loaded + skipped`` is the
        number of non-empty lines. A leading UTF-8 BOM is dropped. Raises
        StorageError if the file exists but cannot be read; the current
        products are then kept.
        """
        if not os.path.exists(path):
            self._products = []
            return LoadResult(missing=True)

        try:
            with open(path, "rb") as f:
                lines = f.readlines()
        except OSError as e:
            logger.warning("Could not read inventory from %s: %s", path, e)
            raise StorageError(f"Unable to load data from '{path}': {e}") from e

        products: List[Product] = []
        seen = set()
        skipped = duplicates = 0
        for lineno, raw in enumerate(lines, 1):
            if not raw.rstrip(b"\r\n"):
                continue
            try:
                line = raw.decode("utf-8-sig" if lineno == 1 else "utf-8")
            except UnicodeDecodeError:
                logger.warning("%s:%d: skipping line that is not valid UTF-8", path, lineno)
                skipped += 1
                continue
            product = Product.decode(line)
            if product is None:
                logger.warning("%s:%d: skipping malformed line", path, lineno)
                skipped += 1
                continue
            if product.id in seen:
                logger.warning("%s:%d: skipping duplicate id %s", path, lineno, product.id)
                skipped += 1
                duplicates += 1
                continue
            seen.add(product.id)
            products.append(product)

        self._products = products
        return LoadResult(loaded=len(products), skipped=skipped, duplicates=duplicates)


# ------------------------------------------------------------------------- #
#  Reporting
# ------------------------------------------------------------------------- #
def format_table(products) -> str:
    """Render products as an ID / Name / Price / Quantity table."""
    header = f"{'ID':<5}{'Name':<20}{'Price':<10}{'Quantity':<10}"
    lines = [header, "-" * 45]
    for p in products:
        lines.append(f"{p.id:<5}{p.name:<20}{p.price:<10.2f}{p.quantity:<10}")
    return "\n".join(lines)


def generate_report(inventory: Inventory, threshold: int = LOW_STOCK_THRESHOLD) -> str:
    """
    Produce a multi-line string showing a table of products,
    the total inventory value, and low-stock warnings.
    """
    products = inventory.list_products()
    if not products:
        return "No products in inventory."

    lines = [format_table(products), ""]
    lines.append(f"Total Products: {len(products)}")
    lines.append(f"TOTAL INVENTORY VALUE: ${inventory.total_value():,.2f}")

    low_stock = inventory.low_stock(threshold)
    if low_stock:
        lines.append(f"\n⚠️  Low-stock items (< {threshold} units):")
        for p in low_stock:
            lines.append(f"   - {p.id}: {p.name} (Qty: {p.quantity})")
    else:
        lines.append("\nAll items have sufficient stock.")
    return "\n".join(lines)


# ------------------------------------------------------------------------- #
#  CLI – Simple interactive text menu
# ------------------------------------------------------------------------- #
def _print_menu() -> None:
    menu = """
=== Inventory Management Menu ===

1. Add new product
2. View all products
3. Search product by ID
4. Update product quantity
5. Save data to file
6. Load data from file
7. View low-stock products
8. Export stock chart
9. Exit
"""
    print(menu)


def _prompt_int(prompt: str) -> int:
    while True:
        try:
            return int(input(prompt).strip())
        except ValueError:
            print("❌ Invalid integer. Please try again.")


def _prompt_float(prompt: str) -> float:
    while True:
        try:
            val = float(input(prompt).strip())
            if not math.isfinite(val):
                raise ValueError(val)
            return val
        except ValueError:
            print("❌ Invalid number. Please try again.")


def _load(inv: Inventory, path: str) -> bool:
    """Load into `inv`, printing the outcome. Returns False if the file could not be read."""
    try:
        result = inv.load(path)
    except StorageError as e:
        print(f"❌ Error: {e}")
        return False
    if result.missing:
        print(f"⚠️  No data file found at '{path}'. Starting with empty inventory.")
        return True
    print(f"✅ Inventory loaded from '{path}' ({result.loaded} products)")
    if result.skipped:
        print(f"⚠️  {result.skipped} invalid entries were skipped.")
    return True


def _save(inv: Inventory, path: str) -> bool:
    try:
        count = inv.save(path)
    except StorageError as e:
        print(f"❌ Error: {e}")
        return False
    print(f"✅ Inventory saved to '{path}' ({count} products)")
    return True


def _add_product(inv: Inventory) -> None:
    print("\n--- Add New Product ---")
    product_id = _prompt_int("Product ID: ")
    if inv.find_by_id(product_id) is not None:
        print(f"❌ Error: Product with ID {product_id} already exists.")
        return
    name = input("Product name: ").strip()
    price = _prompt_float("Price ($): ")
    quantity = _prompt_int("Quantity: ")
    try:
        inv.add(product_id, name, price, quantity)
        print(f"✅ Added '{name}' (ID: {product_id}).")
    except InventoryError as e:
        print(f"❌ Error: {e}")


def _search_product(inv: Inventory) -> None:
    print("\n--- Search Product ---")
    product_id = _prompt_int("Product ID to search: ")
    product = inv.find_by_id(product_id)
    if product is None:
        print(f"❌ Product with ID {product_id} not found.")
    else:
        print(format_table([product]))


def _update_quantity(inv: Inventory) -> None:
    print("\n--- Update Product Quantity ---")
    product_id = _prompt_int("Product ID: ")
    product = inv.find_by_id(product_id)
    if product is None:
        print(f"❌ Product with ID {product_id} not found.")
        return
    print(f"Current quantity: {product.quantity}")
    new_quantity = _prompt_int("New quantity: ")
    try:
        inv.update_quantity(product_id, new_quantity)
        print("✅ Quantity updated.")
    except InventoryError as e:
        print(f"❌ Error: {e}")


def _show_low_stock(inv: Inventory) -> None:
    print("\n--- Low Stock Alert ---")
    low_stock = inv.low_stock()
    if low_stock:
        print(format_table(low_stock))
    else:
        print("No products with low stock.")


def _export_chart(inv: Inventory) -> None:
    from inventory_chart import save_stock_chart

    try:
        out = save_stock_chart(inv.list_products(), CHART_FILE)
    except OSError as e:
        print(f"❌ Error: Unable to write chart: {e}")
        return
    print(f"✅ Stock chart written to '{out}'")


def main(path: Optional[str] = None) -> None:
    if path is None:
        path = sys.argv[1] if len(sys.argv) > 1 else DATA_FILE
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
    inv = Inventory()
    # A file that exists but failed to load must not be overwritten on exit
    autosave = _load(inv, path)

    try:
        while True:
            _print_menu()
            choice = input("Select an option (1-9): ").strip()

            if choice == "1":
                _add_product(inv)

            elif choice == "2":
                print("\n--- Product Inventory ---")
                print(generate_report(inv))
                print()  # blank line

            elif choice == "3":
                _search_product(inv)

            elif choice == "4":
                _update_quantity(inv)

            elif choice == "5":
                autosave = _save(inv, path) or autosave

            elif choice == "6":
                autosave = _load(inv, path) or autosave

            elif choice == "7":
                _show_low_stock(inv)

            elif choice == "8":
                _export_chart(inv)

            elif choice == "9":
                print("\n👋 Bye!")
                break

            else:
                print("❓ Invalid selection – please pick a number 1-9.")
    except (EOFError, KeyboardInterrupt):
        print()
    if autosave:
        _save(inv, path)
    else:
        print(f"⚠️  Not saving: '{path}' could not be loaded, so it was left untouched.")


if __name__ == "__main__":
    # Entry point when running `python inventory.py [data-file]`
    main()
