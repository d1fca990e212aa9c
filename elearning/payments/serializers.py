from rest_framework import serializers

from .models import Order, OrderItem


class OrderItemSerializer(serializers.ModelSerializer):
    course_id = serializers.IntegerField(read_only=True, allow_null=True)

    class Meta:
        model = OrderItem
        fields = ["course_id", "course_title", "price"]


class OrderSerializer(serializers.ModelSerializer):
    """
    Buyer-facing view of an order.

    The internal failure reason stays in the admin; buyers only see the status.
    """

    items = OrderItemSerializer(many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "status",
            "total_amount",
            "currency",
            "payment_reference",
            "items",
            "created_at",
        ]
