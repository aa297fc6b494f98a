from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='TravelerProfile',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('bio', models.TextField(blank=True, help_text='Tell other travelers about yourself', max_length=1000)),
                ('location', models.CharField(blank=True, help_text='Home city or region', max_length=120)),
                ('travel_style', models.CharField(choices=[('adventure', 'Adventure'), ('relaxation', 'Relaxation'), ('cultural', 'Cultural'), ('budget', 'Budget'), ('luxury', 'Luxury'), ('solo', 'Solo'), ('group', 'Group')], default='adventure', max_length=20)),
                ('interests', models.JSONField(blank=True, default=list, help_text='List of interests, e.g. Hiking, Food')),
                ('languages', models.JSONField(blank=True, default=list, help_text='Languages spoken')),
                ('verification_status', models.CharField(choices=[('unverified', 'Unverified'), ('email_verified', 'Email verified'), ('id_verified', 'ID verified'), ('fully_verified', 'Fully verified')], default='unverified', max_length=20)),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='profile', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'profiles_travelerprofile',
                'indexes': [models.Index(fields=['travel_style'], name='profile_travel_style_idx')],
            },
        ),
    ]
