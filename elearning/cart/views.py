from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from .serializers import AddToCartSerializer, CartSerializer
from .store import CartStore


def _cart_response(cart, message=None, status_code=status.HTTP_200_OK):
    body = {"data": CartSerializer(cart).data}
    if message:
        body["message"] = message
    return Response(body, status=status_code)


class CartView(APIView):
    """GET the caller's cart, DELETE to clear it."""

    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        return _cart_response(CartStore().get(request.user))

    def delete(self, request):
        return _cart_response(CartStore().clear(request.user), "Cart cleared successfully")


class AddToCartView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request):
        serializer = AddToCartSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        cart = CartStore().add(request.user, serializer.validated_data["courseId"])
        return _cart_response(cart, "Course added to cart")


class RemoveFromCartView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def delete(self, request, course_id: int):
        cart = CartStore().remove(request.user, course_id)
        return _cart_response(cart, "Item removed successfully")
