from django.conf import settings
import django.core.validators
from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone
import uuid


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='TravelMatch',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('score', models.PositiveSmallIntegerField(help_text='Compatibility score from 0-100', validators=[django.core.validators.MinValueValidator(0), django.core.validators.MaxValueValidator(100)])),
                ('shared_interests', models.JSONField(default=list, help_text='Interests both travelers share')),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('accepted', 'Accepted'), ('declined', 'Declined'), ('connected', 'Connected')], default='pending', max_length=20)),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now, editable=False)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('candidate', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='travel_matches_as_candidate', to=settings.AUTH_USER_MODEL)),
                ('viewer', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='travel_matches', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'travel_matching_travelmatch',
                'ordering': ['-score', 'candidate_id'],
                'indexes': [
                    models.Index(fields=['viewer', 'status'], name='match_viewer_status_idx'),
                    models.Index(fields=['candidate', 'status'], name='match_candidate_status_idx'),
                ],
                'constraints': [
                    models.UniqueConstraint(condition=models.Q(('status', 'declined'), _negated=True), fields=('viewer', 'candidate'), name='unique_live_match_per_pair'),
                ],
            },
        ),
    ]
