import uuid

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='TrackingEvent',
            fields=[
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('subject_type', models.CharField(choices=[('ride', 'Ride'), ('order', 'Order')], max_length=20)),
                ('subject_id', models.UUIDField()),
                ('event_type', models.CharField(choices=[('ride_requested', 'Ride Requested'), ('ride_accepted', 'Ride Accepted'), ('ride_started', 'Ride Started'), ('ride_completed', 'Ride Completed'), ('ride_cancelled', 'Ride Cancelled'), ('order_placed', 'Order Placed'), ('order_accepted', 'Order Accepted'), ('rider_accepted', 'Rider Accepted'), ('order_on_the_way', 'Order On The Way'), ('order_delivered', 'Order Delivered'), ('order_cancelled', 'Order Cancelled')], max_length=100)),
                ('actor_id', models.CharField(blank=True, max_length=64)),
                ('event_data', models.JSONField(blank=True, default=dict)),
                ('location_lat', models.DecimalField(blank=True, decimal_places=7, max_digits=10, null=True)),
                ('location_lng', models.DecimalField(blank=True, decimal_places=7, max_digits=10, null=True)),
                ('published', models.BooleanField(default=False)),
                ('timestamp', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'db_table': 'tracking_events',
                'ordering': ['-timestamp'],
                'indexes': [
                    models.Index(fields=['subject_type', 'subject_id'], name='tracking_ev_subject_idx'),
                    models.Index(fields=['event_type'], name='tracking_ev_type_idx'),
                    models.Index(fields=['timestamp'], name='tracking_ev_timestamp_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='DeadLetterQueue',
            fields=[
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('topic', models.CharField(help_text='Kafka topic name', max_length=255)),
                ('event_data', models.JSONField(help_text='Original event data')),
                ('error_message', models.TextField(blank=True, help_text='Error that caused the failure', null=True)),
                ('retry_count', models.IntegerField(default=0, help_text='Number of retry attempts')),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('retrying', 'Retrying'), ('processed', 'Processed'), ('failed', 'Failed')], default='pending', max_length=50)),
                ('next_retry_at', models.DateTimeField(blank=True, help_text='When to retry next', null=True)),
                ('processed_at', models.DateTimeField(blank=True, null=True)),
            ],
            options={
                'db_table': 'dead_letter_queue',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['status'], name='dead_letter_status_idx'),
                    models.Index(fields=['next_retry_at'], name='dead_letter_next_retry_idx'),
                    models.Index(fields=['topic'], name='dead_letter_topic_idx'),
                ],
            },
        ),
    ]
