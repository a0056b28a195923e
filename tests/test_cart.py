import random
import unittest

from api.models import CartLine, Product
from utils import cart


def _product(pid, price, name=None):
    return Product(
        id=pid,
        name=name or pid.upper(),
        price=price,
        seller_id="s1",
        seller_name="Seller",
        location="Lagos",
    )


class CartReducerTestCase(unittest.TestCase):
    def test_merge_scenario(self):
        p1, p2 = _product("p1", 1500), _product("p2", 2500)
        c = cart.EMPTY_CART
        c = cart.add_item(c, p1)
        c = cart.add_item(c, p1)
        c = cart.add_item(c, p2)

        self.assertEqual(
            c,
            (CartLine("p1", "P1", 1500, 2), CartLine("p2", "P2", 2500, 1)),
        )
        self.assertEqual([cart.line_total(line) for line in c], [3000, 2500])
        self.assertEqual(cart.cart_total(c), 5500)
        self.assertEqual(cart.item_count(c), 3)

    def test_random_sequences_keep_invariants(self):
        rng = random.Random(1234)
        products = [_product(f"p{i}", rng.randint(0, 5000)) for i in range(6)]
        for _ in range(50):
            c = cart.EMPTY_CART
            added = [rng.choice(products) for _ in range(rng.randint(0, 30))]
            for p in added:
                c = cart.reduce_cart(c, cart.AddItem(p))

            ids = [line.product_id for line in c]
            self.assertEqual(len(ids), len(set(ids)))
            self.assertTrue(all(line.quantity >= 1 for line in c))
            self.assertEqual(cart.cart_total(c), sum(p.price for p in added))
            self.assertEqual(cart.item_count(c), len(added))

    def test_item_count_independent_of_order(self):
        p1, p2 = _product("p1", 10), _product("p2", 20)
        seq = [p1, p2, p1, p1, p2]
        forward = cart.EMPTY_CART
        for p in seq:
            forward = cart.add_item(forward, p)
        backward = cart.EMPTY_CART
        for p in reversed(seq):
            backward = cart.add_item(backward, p)

        self.assertEqual(cart.item_count(forward), 5)
        self.assertEqual(cart.item_count(backward), 5)
        self.assertEqual(cart.cart_total(forward), cart.cart_total(backward))

    def test_add_does_not_mutate_previous_cart(self):
        before = cart.add_item(cart.EMPTY_CART, _product("p1", 100))
        after = cart.add_item(before, _product("p1", 100))
        self.assertEqual(before[0].quantity, 1)
        self.assertEqual(after[0].quantity, 2)

    def test_remove_and_clear(self):
        c = cart.EMPTY_CART
        for p in (_product("p1", 100), _product("p2", 200), _product("p1", 100)):
            c = cart.add_item(c, p)

        c = cart.reduce_cart(c, cart.RemoveItem("p1"))
        self.assertEqual([line.product_id for line in c], ["p2"])
        self.assertEqual(cart.reduce_cart(c, cart.RemoveItem("missing")), c)

        cleared = cart.reduce_cart(c, cart.ClearCart())
        self.assertEqual(cleared, ())
        self.assertEqual(cart.cart_total(cleared), 0)
        self.assertEqual(cart.item_count(cleared), 0)
        self.assertEqual(cart.clear(), ())

    def test_unknown_action(self):
        with self.assertRaises(TypeError):
            cart.reduce_cart(cart.EMPTY_CART, "add")


if __name__ == "__main__":
    unittest.main()
