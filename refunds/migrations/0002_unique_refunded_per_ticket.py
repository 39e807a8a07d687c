from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("refunds", "0001_initial"),
    ]

    operations = [
        migrations.AddConstraint(
            model_name="refundrequest",
            constraint=models.UniqueConstraint(
                condition=models.Q(("status", "refunded")),
                fields=("ticket",),
                name="unique_refunded_per_ticket",
            ),
        ),
    ]
