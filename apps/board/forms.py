# apps/board/forms.py

"""
Input shapes of the board commands

One form per command. Forms only validate shape; existence and tenant
checks happen in the command handlers.
"""

from django import forms
from django.core.exceptions import ValidationError

TITLE_ERRORS = {
    'required': 'Title is required',
    'min_length': 'Title is too short',
}


def title_field(min_length, required=True):
    return forms.CharField(
        min_length=min_length,
        max_length=255,
        required=required,
        error_messages=TITLE_ERRORS,
    )


class ImageReferenceField(forms.CharField):
    """
    Background image picked by the client

    Serialized as ``id|thumbUrl|fullUrl|linkHTML|userName``; cleans to a
    dict keyed by the Board image fields.
    """

    parts = ('image_id', 'image_thumb_url', 'image_full_url', 'image_link_html', 'image_user_name')

    default_error_messages = {
        'required': 'Image is required',
        'incomplete': 'Missing fields. Failed to create board.',
    }

    def to_python(self, value):
        value = super().to_python(value)
        if value in self.empty_values:
            return value

        values = value.split('|')
        if len(values) != len(self.parts) or not all(values):
            raise ValidationError(self.error_messages['incomplete'], code='incomplete')

        return dict(zip(self.parts, values))


class ReorderItemsField(forms.JSONField):
    """
    Non-empty list of ``{id, position}`` objects with unique ids

    With ``with_container`` each item may also carry ``list_id``.
    """

    default_error_messages = {
        'not_a_list': 'Items must be a list',
        'invalid_item': 'Each item needs an integer id and a non-negative position',
        'duplicate': 'Items contain duplicate ids',
    }

    def __init__(self, with_container=False, **kwargs):
        self.with_container = with_container
        super().__init__(**kwargs)

    def _to_int(self, value):
        if isinstance(value, bool):
            raise ValueError(value)
        return int(value)

    def clean(self, value):
        value = super().clean(value)

        if not isinstance(value, list) or not value:
            raise ValidationError(self.error_messages['not_a_list'], code='not_a_list')

        items = []
        for raw in value:
            if not isinstance(raw, dict):
                raise ValidationError(self.error_messages['invalid_item'], code='invalid_item')
            try:
                item = {
                    'id': self._to_int(raw['id']),
                    'position': self._to_int(raw['position']),
                }
                if self.with_container:
                    list_id = raw.get('list_id')
                    item['list_id'] = self._to_int(list_id) if list_id is not None else None
            except (KeyError, TypeError, ValueError):
                raise ValidationError(self.error_messages['invalid_item'], code='invalid_item')

            if item['position'] < 0:
                raise ValidationError(self.error_messages['invalid_item'], code='invalid_item')
            items.append(item)

        if len({item['id'] for item in items}) != len(items):
            raise ValidationError(self.error_messages['duplicate'], code='duplicate')

        return items


# === BOARD ===

class CreateBoardForm(forms.Form):
    title = title_field(3)
    image = ImageReferenceField()


class UpdateBoardForm(forms.Form):
    id = forms.IntegerField()
    title = title_field(3)


class BoardIdForm(forms.Form):
    id = forms.IntegerField()


# === LIST ===

class CreateListForm(forms.Form):
    board_id = forms.IntegerField()
    title = title_field(2)


class UpdateListForm(forms.Form):
    board_id = forms.IntegerField()
    id = forms.IntegerField()
    title = title_field(3)


class ListIdForm(forms.Form):
    board_id = forms.IntegerField()
    id = forms.IntegerField()


class UpdateListOrderForm(forms.Form):
    board_id = forms.IntegerField()
    items = ReorderItemsField()


# === CARD ===

class CreateCardForm(forms.Form):
    board_id = forms.IntegerField()
    list_id = forms.IntegerField()
    title = title_field(2)


class UpdateCardForm(forms.Form):
    """Only title and description can change, each one optional"""

    board_id = forms.IntegerField()
    id = forms.IntegerField()
    title = title_field(3, required=False)
    description = forms.CharField(
        min_length=3,
        required=False,
        error_messages={
            'min_length': 'Description is too short',
        },
    )

    updatable_fields = ('title', 'description')

    def clean(self):
        cleaned_data = super().clean()

        changes = {
            name: cleaned_data[name]
            for name in self.updatable_fields
            if name in self.data and cleaned_data.get(name)
        }
        if not changes and not self.errors:
            raise ValidationError('Nothing to update', code='empty')

        cleaned_data['changes'] = changes
        return cleaned_data


class CardIdForm(forms.Form):
    board_id = forms.IntegerField()
    id = forms.IntegerField()


class UpdateCardOrderForm(forms.Form):
    board_id = forms.IntegerField()
    items = ReorderItemsField(with_container=True)
