from decimal import Decimal

from rest_framework import status
from rest_framework.test import APITestCase

from elearning.cart.models import Cart, CartItem
from elearning.cart.store import CartStore
from elearning.enrollments.store import EntitlementStore
from elearning.exceptions import Conflict, NotFound, Unavailable
from elearning.tests.factories import make_course, make_user


class CartStoreTests(APITestCase):
    @classmethod
    def setUpTestData(cls):
        cls.user = make_user("max")
        cls.python = make_course("Python Grundlagen", "50.00")
        cls.django = make_course("Django REST", "30.00")
        cls.draft = make_course("Entwurf", "10.00", published=False)

    def setUp(self):
        self.store = CartStore()

    def test_get_creates_cart_lazily(self):
        self.assertFalse(Cart.objects.filter(user=self.user).exists())
        cart = self.store.get(self.user)
        self.assertEqual(cart.items.count(), 0)
        self.assertTrue(Cart.objects.filter(user=self.user).exists())

    def test_add_snapshots_current_price(self):
        self.store.add(self.user, self.python.pk)

        self.python.price = Decimal("99.00")
        self.python.save()

        item = CartItem.objects.get(cart__user=self.user, course=self.python)
        self.assertEqual(item.price, Decimal("50.00"))
        self.assertEqual(self.store.get(self.user).total, Decimal("50.00"))

    def test_add_same_course_twice_conflicts(self):
        self.store.add(self.user, self.python.pk)
        with self.assertRaises(Conflict):
            self.store.add(self.user, self.python.pk)
        self.assertEqual(CartItem.objects.filter(cart__user=self.user).count(), 1)

    def test_add_owned_course_conflicts(self):
        EntitlementStore().grant(self.user, [self.python.pk], source="manual")
        with self.assertRaises(Conflict):
            self.store.add(self.user, self.python.pk)

    def test_add_missing_course(self):
        with self.assertRaises(NotFound):
            self.store.add(self.user, 999999)

    def test_add_unpublished_course(self):
        with self.assertRaises(Unavailable):
            self.store.add(self.user, self.draft.pk)

    def test_get_drops_courses_unpublished_after_adding(self):
        self.store.add(self.user, self.python.pk)
        self.store.add(self.user, self.django.pk)

        self.django.published = False
        self.django.save()

        cart = self.store.get(self.user)
        self.assertEqual(list(cart.items.values_list("course_id", flat=True)), [self.python.pk])
        self.assertFalse(CartItem.objects.filter(course=self.django).exists())

    def test_remove_is_idempotent(self):
        self.store.add(self.user, self.python.pk)
        self.store.remove(self.user, self.python.pk)
        cart = self.store.remove(self.user, self.python.pk)
        self.assertEqual(cart.items.count(), 0)

    def test_remove_many_leaves_other_lines(self):
        self.store.add(self.user, self.python.pk)
        self.store.add(self.user, self.django.pk)
        removed = self.store.remove_many(self.user, [self.python.pk, 12345])
        self.assertEqual(removed, 1)
        self.assertEqual(
            list(CartItem.objects.filter(cart__user=self.user).values_list("course_id", flat=True)),
            [self.django.pk],
        )

    def test_remove_many_without_cart(self):
        self.assertEqual(self.store.remove_many(self.user, [self.python.pk]), 0)
        self.assertFalse(Cart.objects.filter(user=self.user).exists())

    def test_clear(self):
        self.store.add(self.user, self.python.pk)
        self.store.add(self.user, self.django.pk)
        cart = self.store.clear(self.user)
        self.assertEqual(cart.items.count(), 0)
        self.assertEqual(self.store.clear(self.user).items.count(), 0)


class CartViewTests(APITestCase):
    @classmethod
    def setUpTestData(cls):
        cls.user = make_user("max")
        cls.other = make_user("erika")
        cls.python = make_course("Python Grundlagen", "50.00")
        cls.draft = make_course("Entwurf", "10.00", published=False)

    def setUp(self):
        self.client.force_authenticate(user=self.user)

    def test_cart_requires_authentication(self):
        self.client.force_authenticate(user=None)
        response = self.client.get("/api/cart/")
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_get_empty_cart(self):
        response = self.client.get("/api/cart/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json()["data"]["items"], [])
        self.assertEqual(response.json()["data"]["total"], "0.00")

    def test_add_to_cart(self):
        response = self.client.post("/api/cart/add/", {"courseId": self.python.pk}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        data = response.json()["data"]
        self.assertEqual(len(data["items"]), 1)
        self.assertEqual(data["items"][0]["course"]["id"], self.python.pk)
        self.assertEqual(data["items"][0]["price"], "50.00")
        self.assertEqual(data["total"], "50.00")

    def test_add_duplicate_returns_409(self):
        self.client.post("/api/cart/add/", {"courseId": self.python.pk}, format="json")
        response = self.client.post("/api/cart/add/", {"courseId": self.python.pk}, format="json")
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.json()["code"], "conflict")

    def test_add_unknown_course_returns_404(self):
        response = self.client.post("/api/cart/add/", {"courseId": 999999}, format="json")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.json()["code"], "not_found")

    def test_add_unpublished_course_returns_404(self):
        response = self.client.post("/api/cart/add/", {"courseId": self.draft.pk}, format="json")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.json()["code"], "unavailable")

    def test_add_without_course_id_returns_400(self):
        response = self.client.post("/api/cart/add/", {}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_remove_from_cart(self):
        self.client.post("/api/cart/add/", {"courseId": self.python.pk}, format="json")
        response = self.client.delete(f"/api/cart/{self.python.pk}/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json()["data"]["items"], [])

    def test_clear_cart(self):
        self.client.post("/api/cart/add/", {"courseId": self.python.pk}, format="json")
        response = self.client.delete("/api/cart/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json()["data"]["items"], [])

    def test_carts_are_per_account(self):
        self.client.post("/api/cart/add/", {"courseId": self.python.pk}, format="json")

        self.client.force_authenticate(user=self.other)
        response = self.client.get("/api/cart/")
        self.assertEqual(response.json()["data"]["items"], [])
