import unittest

from jarconflict.utils.processor import Processor


def square(value: int) -> int:
    return value * value


def fail_on_three(value: int) -> int:
    if value == 3:
        raise ValueError(f"bad value {value}")
    return value


class ProcessorTest(unittest.TestCase):
    def test_map_ordered_keeps_input_order(self):
        with Processor(4) as processor:
            self.assertEqual([v * v for v in range(50)], list(processor.map_ordered(square, range(50))))

    def test_default_concurrency(self):
        with Processor() as processor:
            self.assertGreaterEqual(processor.concurrency, 1)

    def test_worker_exception_is_reraised(self):
        with self.assertRaises(ValueError) as cm:
            with Processor(2) as processor:
                list(processor.map_ordered(fail_on_three, range(6)))
        self.assertIn('bad value 3', str(cm.exception))

    def test_closed_processor_rejects_work(self):
        processor = Processor(1)
        processor.close()

        with self.assertRaises(RuntimeError):
            processor.map_ordered(square, [1])

    def test_invalid_concurrency(self):
        with self.assertRaises(ValueError):
            Processor(0)


if __name__ == '__main__':
    unittest.main()
