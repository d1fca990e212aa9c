from rest_framework import serializers

from ..courses.serializers import CourseSummarySerializer
from .models import Cart, CartItem


class CartItemSerializer(serializers.ModelSerializer):
    """`price` is the snapshot taken at add-time, not the live catalog price."""

    course = CourseSummarySerializer(read_only=True)

    class Meta:
        model = CartItem
        fields = ["id", "course", "price", "added_at"]


class CartSerializer(serializers.ModelSerializer):
    items = CartItemSerializer(many=True, read_only=True)
    total = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)

    class Meta:
        model = Cart
        fields = ["id", "items", "total", "updated_at"]


class AddToCartSerializer(serializers.Serializer):
    courseId = serializers.IntegerField(min_value=1)
