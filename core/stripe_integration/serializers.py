from rest_framework import serializers


class CheckoutItemSerializer(serializers.Serializer):
    courseId = serializers.IntegerField(min_value=1)


class CheckoutRequestSerializer(serializers.Serializer):
    """Body of `create-checkout-session`: `{"items": [{"courseId": 3}, ...]}`."""

    items = CheckoutItemSerializer(many=True, allow_empty=False)

    def get_course_ids(self):
        return [item["courseId"] for item in self.validated_data["items"]]
