from . import core, iterables, schema


def create_object_builder(object_query):
    """
    Create a function that builds an object for ``object_query`` from a value.

    Field resolvers are registered against fields of the object type, but are
    only ever built and called for fields that appear in the query: a field
    that wasn't selected costs nothing.
    """
    def default_field_resolver(field):
        def resolve(value):
            raise core.GraphError("Resolver missing for field {}".format(field.name))

        return resolve

    field_resolvers = [
        [field_query.key, default_field_resolver(field_query.field)]
        for field_query in object_query.field_queries
    ]

    def create_object(value):
        return object_query.create_object(iterables.to_dict(
            (key, resolve_field(value))
            for key, resolve_field in field_resolvers
        ))

    def field_resolver(field):
        def add_field_resolver(build_field_resolver):
            for field_index, field_query in enumerate(object_query.field_queries):
                if field_query.field == field or field_query.field.name == field:
                    field_resolvers[field_index][1] = build_field_resolver(field_query)

            return build_field_resolver

        return add_field_resolver

    create_object.field = field_resolver

    def getter(field):
        def add_field_resolver(resolve_field):
            return field_resolver(field)(lambda field_query: resolve_field)

        return add_field_resolver

    create_object.getter = getter

    def attr(field, attr_name):
        getter(field)(lambda value: getattr(value, attr_name))

    create_object.attr = attr

    if isinstance(object_query.type, schema.ObjectType):
        @getter(schema.typename_field)
        def resolve_typename(_):
            return object_query.type.name

    return create_object


def build_records(type_query, value, build_object):
    """
    Build the result for ``type_query`` from ``value``.

    ``value`` is a single record, ``None`` or a sequence of records to match
    the shape of the query: ``None`` under a nullable query is passed through
    rather than treated as an error.
    """
    if isinstance(type_query, schema.ListQuery):
        return [
            build_records(type_query.element_query, element, build_object)
            for element in value
        ]
    elif isinstance(type_query, schema.NullableQuery):
        if value is None:
            return None
        else:
            return build_records(type_query.element_query, value, build_object)
    else:
        return build_object(value)


def root_object_resolver(type):
    field_handlers = {}

    @core.resolver(type)
    @core.dependencies(injector=core.Injector)
    def resolve_root(graph, query, *, injector):
        build_object = create_object_builder(query)

        def unhandled_field(field_query):
            def resolve(_):
                raise core.UnknownFieldError("{} has no handler for field {}".format(type.name, field_query.field.name))

            return resolve

        for field_query in query.field_queries:
            if field_query.field is not schema.typename_field:
                build_object.field(field_query.field)(unhandled_field)

        for field in field_handlers:
            @build_object.field(field)
            def resolve_field(field_query):
                field_handler = field_handlers[field_query.field]
                return lambda _: injector.call_with_dependencies(
                    field_handler,
                    graph,
                    field_query.type_query,
                    field_query.args,
                )

        return build_object(None)

    def field(field):
        if field not in type.fields:
            raise core.GraphError("{} is not a field of {}".format(field, type.name))
        if field in field_handlers:
            raise core.GraphError("field {} of {} already has a handler".format(field.name, type.name))

        def add_handler(handle):
            if not callable(handle):
                raise core.GraphError("handler for field {} of {} is not callable".format(field.name, type.name))

            field_handlers[field] = handle
            return handle

        return add_handler

    resolve_root.field = field

    return resolve_root
