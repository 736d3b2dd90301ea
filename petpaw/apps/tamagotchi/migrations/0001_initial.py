import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


def stat_field():
    return models.PositiveSmallIntegerField(
        default=50,
        validators=[
            django.core.validators.MinValueValidator(0),
            django.core.validators.MaxValueValidator(100),
        ],
    )


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='VirtualPet',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('name', models.CharField(max_length=50)),
                ('pet_type', models.CharField(default='White Cat', max_length=50)),
                ('hunger', stat_field()),
                ('happiness', stat_field()),
                ('cleanliness', stat_field()),
                ('energy', stat_field()),
                ('level', models.PositiveSmallIntegerField(default=1)),
                ('total_steps', models.PositiveIntegerField(default=0)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='virtual_pets', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'virtual_pets',
                'ordering': ['created_at'],
            },
        ),
        migrations.CreateModel(
            name='Trophy',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=50)),
                ('category', models.CharField(choices=[('steps', 'Steps'), ('days', 'Days')], max_length=10)),
                ('threshold', models.PositiveIntegerField()),
                ('unlocked_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('pet', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='trophies', to='tamagotchi.virtualpet')),
            ],
            options={
                'db_table': 'virtual_pet_trophies',
                'ordering': ['unlocked_at'],
            },
        ),
        migrations.AddConstraint(
            model_name='trophy',
            constraint=models.UniqueConstraint(fields=('pet', 'name'), name='unique_pet_trophy'),
        ),
    ]
