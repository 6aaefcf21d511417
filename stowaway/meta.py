"""
Class level machinery of a Chunk.

The fields declared in the body of a Chunk are prototypes: they are removed from
the class namespace and replaced by descriptors that, at the first access from an
instance, attach a private copy of the prototype to it (with the instance as father).
"""
import copy
import logging


logger = logging.getLogger(__name__)


class FieldDescriptor(object):
    '''Non-data descriptor: the copy is stored in the instance's __dict__ under
    the same name, so that from then on the descriptor is shadowed.'''

    def __init__(self, prototype, name):
        self.prototype = prototype
        self.name = name

        prototype.name = name

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.name})>'

    def __get__(self, instance, owner=None):
        if instance is None:
            return self

        logger.debug("creating field '%s' for %s", self.name, instance.__class__.__name__)
        field = self.prototype.create(father=instance)
        instance.__dict__[self.name] = field

        return field


class FieldBase(object):
    '''What makes an object declarable as a field of a Chunk.'''

    def create(self, father):
        instance = copy.deepcopy(self)
        instance.father = father
        return instance


class MetaChunk(type):
    '''Collect the fields declared in the body of the class, in order of declaration,
    into the "fields_name" attribute.

    A field can't share its name with anything else in the class since, for example,
    a method named like a field would silently hide it.'''

    def __new__(mcs, name, bases, attrs):
        declared = [(_k, _v) for _k, _v in attrs.items() if isinstance(_v, FieldBase)]
        namespace = {_k: _v for _k, _v in attrs.items() if not isinstance(_v, FieldBase)}

        new_cls = super().__new__(mcs, name, bases, namespace)
        new_cls.fields_name = []

        for field_name, prototype in declared:
            if hasattr(new_cls, field_name):
                raise AttributeError(f'field {field_name} clashes with an attribute of class {name}')

            logger.debug('%s: adding field \'%s\'', name, field_name)
            setattr(new_cls, field_name, FieldDescriptor(prototype, field_name))
            new_cls.fields_name.append(field_name)

        return new_cls
