""" Declarative description of the personal data stored by a plugin """


class DatabaseTable(object):
    TYPE = 'database_table'

    def __init__(self, name, privacy_fields, summary):
        self.name = name
        self.privacy_fields = dict(privacy_fields)
        self.summary = summary


class SubsystemLink(object):
    TYPE = 'subsystem_link'

    def __init__(self, name, privacy_fields, summary):
        self.name = name
        self.privacy_fields = dict(privacy_fields)
        self.summary = summary


class MetadataCollection(object):
    """
    Collection of metadata items a plugin declares to the privacy subsystem
    """
    def __init__(self, component):
        self.component = component
        self._items = []

    def add_database_table(self, name, privacy_fields, summary=''):
        self._items.append(DatabaseTable(name, privacy_fields, summary))
        return self

    def add_subsystem_link(self, name, privacy_fields=None, summary=''):
        self._items.append(SubsystemLink(name, privacy_fields or {}, summary))
        return self

    def get_collection(self):
        return list(self._items)

    def get_item(self, name):
        return next((item for item in self._items if item.name == name), None)
